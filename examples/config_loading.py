"""config_loading.py"""

import sys

from slotwise.config import loader

parser = loader("slotwise.yaml")

if __name__ == "__main__":
    parser.render_help()
    print(parser.parse_args(sys.argv[1:]))
