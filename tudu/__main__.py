import sys

from tudu.cli import main

if __name__ == "__main__":
    sys.exit(main())
