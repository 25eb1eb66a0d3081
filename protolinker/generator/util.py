"""Naming helpers shared by the code generators."""


def underscores_to_camel_case(
    text: str, cap_next_letter: bool = True, preserve_period: bool = False
) -> str:
    """Convert a snake_case (or otherwise separated) name to CamelCase.

    Follows protoc's own conversion so generated names line up with the
    names protoc derives from the same input:

    - a lowercase letter is uppercased when it follows a separator or digit
    - an uppercase first character is lowercased unless ``cap_next_letter``
    - digits are kept and capitalise the next letter
    - every other character is dropped, except ``.`` with ``preserve_period``
    - a trailing ``#`` becomes a trailing ``_``
    - a leading ``_`` followed by a digit appends ``_`` to the result
    """
    result: list[str] = []

    for i, c in enumerate(text):
        if "a" <= c <= "z":
            result.append(c.upper() if cap_next_letter else c)
            cap_next_letter = False
        elif "A" <= c <= "Z":
            if i == 0 and not cap_next_letter:
                result.append(c.lower())
            else:
                result.append(c)
            cap_next_letter = False
        elif "0" <= c <= "9":
            result.append(c)
            cap_next_letter = True
        else:
            cap_next_letter = True
            if c == "." and preserve_period:
                result.append(".")

    if text.endswith("#"):
        result.append("_")

    if result and "0" <= result[0] <= "9" and text.startswith("_"):
        result.append("_")

    return "".join(result)


def to_camel_case(snake_str: str) -> str:
    """Convert a group name to the suffix used in its range constants."""
    return underscores_to_camel_case(snake_str, True, False)
