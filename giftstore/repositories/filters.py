"""
Builder for optional query filters
"""
from typing import Any, Callable, List

from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement


class PredicateBuilder:
    """
    Collects WHERE predicates for the filters a caller actually supplied

    Each predicate is a SQLAlchemy expression, so values always travel as
    bound parameters.
    """
    
    def __init__(self):
        self.predicates: List[ColumnElement] = []
    
    def when(self, value: Any, predicate: Callable[[Any], ColumnElement]) -> "PredicateBuilder":
        """Add predicate(value) unless value is None or an empty string"""
        if value is None or (isinstance(value, str) and not value.strip()):
            return self
        self.predicates.append(predicate(value))
        return self
    
    def always(self, predicate: ColumnElement) -> "PredicateBuilder":
        self.predicates.append(predicate)
        return self
    
    def apply(self, query: Query) -> Query:
        if not self.predicates:
            return query
        return query.filter(*self.predicates)
