"""Usage example: run `twostate generate` in this directory first."""

from generated.padding_twostate import Alignment, ClearFirst, Overwrite


def add_zeros(n: int, clear_first: ClearFirst, values: list[int]) -> None:
    if clear_first.is_yes():
        values.clear()
    values.extend([0] * n)


def pad(text: str, width: int, alignment: Alignment = Alignment.default()) -> str:
    if alignment.is_left():
        return text.ljust(width)
    return text.rjust(width)


def store(cache: dict[str, str], key: str, value: str, overwrite: Overwrite) -> None:
    if key in cache and not overwrite:
        return
    cache[key] = value


if __name__ == "__main__":
    values = [1, 2]
    add_zeros(2, ClearFirst.Yes, values)
    print(values)
    print(repr(pad("x", 4)))
    cache = {"a": "1"}
    store(cache, "a", "2", Overwrite.default())
    print(cache)
