import sys

from tictactoe_vip.app import main

if __name__ == '__main__':
    sys.exit(main())
