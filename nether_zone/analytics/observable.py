"""
Observable Value Module
=======================

Explicit published state with on-change notification.

Design:
- Holds one value, notifies subscribers only when it changes
- Subscribers are plain callables (old, new)
- Lock-protected so readers on another thread never see a half update
"""

import threading
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

Observer = Callable[[T, T], None]


class ObservableValue(Generic[T]):
    """
    A value plus an observer callback list.

    Usage:
        detected = ObservableValue(False)
        unsubscribe = detected.subscribe(lambda old, new: print(old, new))
        detected.set(True)   # prints "False True"
        unsubscribe()
    """

    def __init__(
        self,
        initial: T,
        error_handler: Optional[Callable[[Exception], None]] = None,
    ):
        """
        Args:
            initial: Initial value
            error_handler: Receives exceptions raised by observers. Without
                           one, the first observer exception propagates.
        """
        self._value = initial
        self._observers: List[Observer] = []
        self._error_handler = error_handler
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        """Current value (read-only)."""
        with self._lock:
            return self._value

    def set(self, new_value: T) -> bool:
        """
        Replace the value and notify observers if it changed.

        Observers run on the caller's thread, after the lock is released.

        Returns:
            True if the value changed
        """
        with self._lock:
            old_value = self._value
            if old_value == new_value:
                return False
            self._value = new_value
            observers = list(self._observers)

        for observer in observers:
            try:
                observer(old_value, new_value)
            except Exception as e:
                if self._error_handler is None:
                    raise
                self._error_handler(e)
        return True

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer.

        Returns:
            A function that removes the observer again
        """
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def __repr__(self) -> str:
        return f"ObservableValue({self.value!r}, observers={len(self._observers)})"
