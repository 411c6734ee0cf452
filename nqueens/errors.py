"""Exceptions raised by the placement solver and its surfaces."""


class InvalidArgumentError(ValueError):
    """Raised for a board size, region size or mode the solver cannot accept."""


class ProfileNotFoundError(FileNotFoundError):
    """Raised when a named solver profile has no YAML file."""


class ContractValidationError(ValueError):
    """Raised when a solution-set export is malformed or violates its constraints."""


def require_board_size(n) -> int:
    """Validate a board size argument.

    Args:
        n: Candidate board size

    Returns:
        The board size as an int

    Raises:
        InvalidArgumentError: If n is not an integer or is not positive
    """
    # bool is an int subclass; True would otherwise pass as n=1
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(
            f"Board size must be an integer, got {type(n).__name__} {n!r}"
        )
    if n <= 0:
        raise InvalidArgumentError(f"Board size must be at least 1, got {n}")
    return n
