"""
Structured query assembly.
Conditions are collected in clause lists and parameters in an ordered list, so a
statement is valid for any subset of filters and parameter order follows append order.
"""

from sqlalchemy import and_, bindparam
from sqlalchemy.sql.elements import BindParameter, ColumnElement
from sqlalchemy.types import TypeEngine
from typing import Any, List, Optional, Tuple


class QueryParameters:
    """
    Ordered bound parameters.
    The n-th bound value is named ``p<n>``, matching its positional placeholder.
    """
    
    def __init__(self):
        self._values: List[Any] = []
    
    def bind(self, value: Any, type_: Optional[TypeEngine] = None) -> BindParameter:
        """Append a value and return the bind parameter referencing it."""
        self._values.append(value)
        return bindparam(f"p{len(self._values)}", value, type_=type_)
    
    def values(self) -> List[Any]:
        """Bound values in placeholder order."""
        return list(self._values)
    
    def items(self) -> List[Tuple[str, Any]]:
        return [(f"p{index}", value) for index, value in enumerate(self._values, start=1)]
    
    def __len__(self) -> int:
        return len(self._values)


class ClauseList:
    """Conditions that are combined with AND into a single WHERE or HAVING clause."""
    
    def __init__(self):
        self.conditions: List[ColumnElement] = []
    
    def add(self, condition: ColumnElement) -> None:
        self.conditions.append(condition)
    
    def combined(self) -> Optional[ColumnElement]:
        """The conjunction of all conditions, or None when there are none."""
        if not self.conditions:
            return None
        return and_(*self.conditions)
    
    def __bool__(self) -> bool:
        return bool(self.conditions)
    
    def __len__(self) -> int:
        return len(self.conditions)
