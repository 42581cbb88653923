"""
The lazy element-search pipeline.

A DataSet describes how to enumerate candidate elements and which predicates
they must satisfy; nothing touches the page until a SearchStrategy resolves it.
SearchResults is the handle returned to callers: chaining filters builds new
values, and only `element`, `optional_element` and `elements` hit the browser.
"""
import time
from logging import getLogger
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict
from selenium.common.exceptions import NoSuchElementException, StaleElementReferenceException

from fluent_webtest.log import Tag, describe_seconds, log_action

logger = getLogger(__name__)

__all__ = [
    "DataSet",
    "NotFoundError",
    "SearchResults",
    "SearchStrategy",
    "SLEEP_TIME",
    "wait_until_not_none",
]

SLEEP_TIME = 0.3

T = TypeVar("T")


class NotFoundError(NoSuchElementException):
    """Raised when a single element was required but none could be found."""

    def __init__(self, message: str, description: Optional[str] = None):
        self.message = message
        self.description = description or message
        super().__init__(message)

    def __str__(self):
        # selenium appends a link to its own troubleshooting page otherwise
        return self.message


def wait_until_not_none(timeout: float, supplier: Callable[[], Optional[T]]) -> Optional[T]:
    """
    Calls supplier until it returns something other than None, sleeping
    SLEEP_TIME between calls. Gives up after floor(timeout / SLEEP_TIME) + 1
    attempts; there is always at least one attempt, even for a zero or NaN
    timeout, and an infinite timeout polls until something turns up.
    """
    attempt = 0
    while True:
        item = supplier()
        if item is not None:
            return item
        attempt += 1
        if not attempt * SLEEP_TIME <= timeout + 1e-9:
            return None
        time.sleep(SLEEP_TIME)


class DataSet(BaseModel):
    """
    An immutable, re-evaluatable query: `query` enumerates candidates from the
    live page every time it is called, and `predicates` are ANDed in order.
    """

    model_config = ConfigDict(frozen=True)

    description: str
    query: Callable[[], Sequence[Any]]
    predicates: Tuple[Callable[[Any], bool], ...] = ()

    def _matches(self, element: Any) -> bool:
        try:
            return all(predicate(element) for predicate in self.predicates)
        except StaleElementReferenceException:
            return False

    def fetch(self) -> List[Any]:
        try:
            candidates = list(self.query())
        except Exception as e:
            logger.debug(f"Query for {self.description} failed, treating as empty: {e!r}")
            return []
        return [element for element in candidates if self._matches(element)]

    def filter(self, name: str, predicate: Callable[[Any], bool]) -> "DataSet":
        return DataSet(
            description=f"{self.description} and filter '{name}'",
            query=self.query,
            predicates=self.predicates + (predicate,),
        )


class SearchStrategy(BaseModel):
    """
    Decides how a DataSet is resolved. Without a timeout the DataSet is
    fetched exactly once; with one, it is polled until something shows up or
    the time runs out.
    """

    model_config = ConfigDict(frozen=True)

    timeout: Optional[float] = None

    @classmethod
    def direct(cls) -> "SearchStrategy":
        return cls()

    @classmethod
    def wait_for(cls, timeout: float) -> "SearchStrategy":
        return cls(timeout=timeout)

    @property
    def is_waiting(self) -> bool:
        return self.timeout is not None

    def resolve(self, dataset: DataSet) -> List[Any]:
        if not self.is_waiting:
            return dataset.fetch()
        return wait_until_not_none(self.timeout, lambda: dataset.fetch() or None) or []

    def describe(self, dataset: DataSet) -> str:
        if not self.is_waiting:
            return dataset.description
        return f"{dataset.description} within the next {describe_seconds(self.timeout)}"


class SearchResults:
    """
    The result of a page search. Filters return new SearchResults; the page
    is only queried when one of the element accessors is read.
    """

    __slots__ = ("_dataset", "_strategy", "_ascii")

    def __init__(self, dataset: DataSet, strategy: SearchStrategy, ascii: bool = False):
        self._dataset = dataset
        self._strategy = strategy
        self._ascii = ascii

    @property
    def dataset(self) -> DataSet:
        return self._dataset

    @property
    def strategy(self) -> SearchStrategy:
        return self._strategy

    @property
    def ascii(self) -> bool:
        return self._ascii

    def __repr__(self):
        return f"SearchResults({self.strategy.describe(self.dataset)!r})"

    @property
    def element(self):
        """The first matching element; raises NotFoundError if there is none."""
        log_action(Tag.ELEMENT, self.ascii, f"Request for first element with {self.strategy.describe(self.dataset)}")
        found = self.strategy.resolve(self.dataset)
        if not found:
            raise NotFoundError(
                f"Item with {self.strategy.describe(self.dataset)} not found", description=self.dataset.description
            )
        return found[0]

    @property
    def optional_element(self):
        """The first matching element, or None."""
        log_action(Tag.ELEMENT, self.ascii, f"Request for optional element with {self.strategy.describe(self.dataset)}")
        found = self.strategy.resolve(self.dataset)
        return found[0] if found else None

    @property
    def elements(self) -> List[Any]:
        log_action(Tag.ELEMENTS, self.ascii, f"Request for elements with {self.strategy.describe(self.dataset)}")
        return self.strategy.resolve(self.dataset)

    def filter(self, name: str, predicate: Callable[[Any], bool]) -> "SearchResults":
        """
        Narrow the search with a custom predicate.
        name - free text used in log lines and error messages
        """
        return SearchResults(self.dataset.filter(name, predicate), self.strategy, self.ascii)

    def attribute(self, attribute: str, containing: str) -> "SearchResults":
        """Keep elements whose `attribute` value contains `containing`."""

        def predicate(element) -> bool:
            value = element.web_element.get_attribute(attribute)
            return value is not None and containing in value

        return self.filter(f'Attribute "{attribute}" with value "{containing}"', predicate)

    def text(self, containing: str) -> "SearchResults":
        """Keep elements whose rendered text contains `containing`."""

        def predicate(element) -> bool:
            value = element.web_element.text
            return value is not None and containing in value

        return self.filter(f'Text contains "{containing}"', predicate)
