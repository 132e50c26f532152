import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def caret_excerpt(code: str, idx: int, radius: int = 10) -> str:
    """Two lines: the input around ``idx`` (with ellipses when cut) and a caret under ``idx``"""
    start_idx = max(0, idx - radius)
    ellipsis_pre = start_idx > 0
    end_idx = min(len(code), idx + radius)
    ellipsis_post = end_idx < len(code)
    return "\n".join(
        [
            ("..." if ellipsis_pre else "") + code[start_idx:end_idx] + ("..." if ellipsis_post else ""),
            " " * (idx - start_idx + (3 if ellipsis_pre else 0)) + "^",
        ]
    )


def preview(text: str, length: int = 10) -> str:
    return text if len(text) <= length else text[:length] + " ..."
