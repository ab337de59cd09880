"""
Entry point for running the cargojni CLI as a module.

Usage: python -m cargojni [command] [options]
"""

from cargojni.cli.parser import main

if __name__ == "__main__":
    main()
