"""Services package."""

from .basket import BasketStore
from .catalog import Catalog
from .order import ContactsValidation, OrderDraft
from .submission import SubmissionGuard

__all__ = ["BasketStore", "Catalog", "ContactsValidation", "OrderDraft", "SubmissionGuard"]
