from collections.abc import Callable
from typing import Any

type Comparator[K] = Callable[[K, K], int]
type AnyComparator = Comparator[Any]
