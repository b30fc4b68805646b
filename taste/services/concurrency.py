# taste/services/concurrency.py
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_CONCURRENCY = 2


def bounded_map(fn: Callable[[T], R], items: Iterable[T], concurrency: int = DEFAULT_CONCURRENCY) -> List[R]:
    """
    Aplica fn a cada item con como mucho `concurrency` llamadas en vuelo.
    Devuelve los resultados en el orden de entrada cuando termina todo el lote.
    """
    items = list(items)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=max(1, concurrency), thread_name_prefix="taste") as executor:
        return list(executor.map(fn, items))
