"""Entry point for the Pairs memory game.

Sets up the ECS world, event bus, systems and the Arcade window.
"""
from pairs.app import main

if __name__ == "__main__":
    main()
