"""Allow `python -m twostate`."""

from twostate.cli import main

if __name__ == "__main__":
    main()
