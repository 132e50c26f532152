import logging
import math
import sys

from rpn.engine import RPN
from rpn.errors import RPNError


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.WARNING)

    rpn = RPN().register_operator("sin", 1, lambda deg: math.sin(math.radians(deg)))

    while True:
        try:
            code = input("> ")
        except EOFError:
            break

        try:
            postfix = rpn.generate(code)
        except RPNError as e:
            print(e)
            continue

        print(f"rpn: {postfix}")

        try:
            result = rpn.calculate(postfix)
        except RPNError as e:
            print(e)
            continue

        print(result)
