"""Allow running wakepower as ``python -m wakepower``."""

from wakepower.cli import main

if __name__ == "__main__":
    main()
