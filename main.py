#!/usr/bin/env python3
from mysh.shell import main_loop

if __name__ == "__main__":
    main_loop()
