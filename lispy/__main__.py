import sys

from lispy.repl import main

if __name__ == "__main__":
    sys.exit(main())
