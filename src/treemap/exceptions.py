__author__ = "xbhel"
__email__ = "xbhel@outlook.com"


class TreeMapException(Exception):
    """
    Base exception class.

    All TreeMap-specific exceptions should subclass this class.
    """


class UnresolvableOrderingError(TreeMapException, TypeError):
    """
    Raised when no comparator was given and the first key inserted is of a
    type that has no built-in ordering (number, string, int or date/time).
    """

    def __init__(self, key_type: type) -> None:
        self.key_type = key_type
        super().__init__(
            f"Cannot sort keys of type '{key_type.__qualname__}'. "
            "You have to specify a comparator if the type of key in this map "
            "is not a number, string, int or date/time."
        )


class OrderInvariantError(TreeMapException, AssertionError):
    """
    Raised by the opt-in order check (``verify_order``) when the sorted key
    list no longer matches the entries or is out of order.
    """
