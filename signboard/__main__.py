"""Entry point for running signboard as a module.

Usage:
    python -m signboard
"""

from signboard.main import run

if __name__ == "__main__":
    run()
