"""
Loading state value

LoadingState is a single tagged value describing the progress of one
asynchronous fetch: idle, loading (with optional progress 0..1), success
(with payload) or failure (with error). Consumers match on ``kind``:

    match state.kind:
        case LoadingKind.IDLE: ...
        case LoadingKind.LOADING: showSpinner(state.progress)
        case LoadingKind.SUCCESS: render(state.value)
        case LoadingKind.FAILURE: showError(state.error)
"""

from enum import StrEnum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class LoadingKind(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class LoadingState(Generic[T]):
    """Immutable idle/loading/success/failure value, dood!"""

    __slots__ = ("_kind", "_progress", "_value", "_error")

    def __init__(
        self,
        kind: LoadingKind,
        progress: Optional[float] = None,
        value: Optional[T] = None,
        error: Optional[BaseException] = None,
    ):
        self._kind = kind
        self._progress = progress
        self._value = value
        self._error = error

    @classmethod
    def idle(cls) -> "LoadingState[T]":
        return cls(LoadingKind.IDLE)

    @classmethod
    def loading(cls, progress: Optional[float] = None) -> "LoadingState[T]":
        if progress is not None and not 0.0 <= progress <= 1.0:
            raise ValueError(f"progress must be within 0..1, got {progress}")
        return cls(LoadingKind.LOADING, progress=progress)

    @classmethod
    def success(cls, value: T) -> "LoadingState[T]":
        return cls(LoadingKind.SUCCESS, value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "LoadingState[T]":
        return cls(LoadingKind.FAILURE, error=error)

    @property
    def kind(self) -> LoadingKind:
        return self._kind

    @property
    def isLoading(self) -> bool:
        return self._kind is LoadingKind.LOADING

    @property
    def value(self) -> Optional[T]:
        """Payload, only present for success"""
        return self._value if self._kind is LoadingKind.SUCCESS else None

    @property
    def error(self) -> Optional[BaseException]:
        """Error, only present for failure"""
        return self._error if self._kind is LoadingKind.FAILURE else None

    @property
    def progress(self) -> Optional[float]:
        """Progress, only present for loading (and may be None there too)"""
        return self._progress if self._kind is LoadingKind.LOADING else None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LoadingState):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        match self._kind:
            case LoadingKind.IDLE:
                return True
            case LoadingKind.LOADING:
                return self._progress == other._progress
            case LoadingKind.SUCCESS:
                return self._value == other._value
            case LoadingKind.FAILURE:
                # Errors are not compared: any two failures are equal
                return True

    # Payloads may be unhashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        match self._kind:
            case LoadingKind.IDLE:
                return "LoadingState.idle()"
            case LoadingKind.LOADING:
                return f"LoadingState.loading({self._progress!r})"
            case LoadingKind.SUCCESS:
                return f"LoadingState.success({self._value!r})"
            case LoadingKind.FAILURE:
                return f"LoadingState.failure({self._error!r})"
