import math

from rpn.engine import RPN
from rpn.errors import RPNError

rpn = (
    RPN()
    .register_operator("sin", 1, lambda deg: math.sin(math.radians(deg)))
    .register_operator("toStr", 1, lambda a: str(a))
    .register_operator("toNum", 1, lambda a: float(a))
    .register_operator("merge", 2, lambda a, b: float(f"{a}{b}"))
    .register_operator("pi", 0, lambda: math.pi)
)

for code in [
    "2*(5+7)",
    "4**3**2",
    "~-5*4**(0x0f-12)**2",
    "sin 90",
    "sin(45+45)",
    "toNum(toStr(2 + 1)) * merge(3,4)",
    "2 * pi - 1",
    "1 << 4 | 0x0f & 3",
    "2+(3",
    "2+)3",
    "2 $ 3",
]:
    print("=" * 10)
    print(f"code: {code!r}")
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

    print(f"result: {result}")
