"""Controller error types and helpers for classifying API errors."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class NotFoundError(Exception):
    """The requested resource does not exist."""


class AlreadyExistsError(Exception):
    """The resource being created already exists."""


class ReconcileError(Exception):
    """An error raised during reconciliation, marked transient or unrecoverable."""

    def __init__(self, err: BaseException, transient: bool) -> None:
        super().__init__(str(err))
        self.err = err
        self.transient = transient
        self.__cause__ = err

    def __str__(self) -> str:
        return str(self.err)


def transient_error(err: BaseException) -> ReconcileError:
    """Wrap err as an error that may be retried."""
    return ReconcileError(err, True)


def unrecoverable_error(err: BaseException) -> ReconcileError:
    """Wrap err as an error that must not be retried."""
    return ReconcileError(err, False)


def _chain(err: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__


def is_not_found(err: BaseException | None) -> bool:
    """True if err, or any error it wraps, reports a missing resource."""
    return any(isinstance(e, NotFoundError) for e in _chain(err))


def is_already_exists(err: BaseException | None) -> bool:
    """True if err, or any error it wraps, reports an existing resource."""
    return any(isinstance(e, AlreadyExistsError) for e in _chain(err))


def ignore_not_found(err: BaseException | None) -> BaseException | None:
    """Return None if err reports a missing resource, otherwise err."""
    return None if is_not_found(err) else err


def ignore_already_exists(err: BaseException | None) -> BaseException | None:
    """Return None if err reports an existing resource, otherwise err."""
    return None if is_already_exists(err) else err


class ReconcileErrors(Exception):
    """A collection of ReconcileError values."""

    def __init__(self, errs: Iterable[ReconcileError] = ()) -> None:
        super().__init__()
        self._errs: list[ReconcileError] = list(errs)

    def __str__(self) -> str:
        return "; ".join(str(err) for err in self._errs)

    def __iter__(self) -> Iterator[ReconcileError]:
        return iter(self._errs)

    def __len__(self) -> int:
        return len(self._errs)

    def append(self, err: ReconcileError) -> None:
        """Add an error to the collection."""
        self._errs.append(err)

    def any(self) -> bool:
        """True if any errors were collected."""
        return bool(self._errs)

    def is_transient(self) -> bool:
        """True if every collected error is transient."""
        return all(err.transient for err in self._errs)