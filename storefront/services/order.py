"""Order draft: accumulates checkout fields and owns their validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..api import ShopApiProtocol
from ..errors import IncompleteOrderError
from ..models import PAYMENT_METHODS, OrderResult
from ..utils import is_valid_email, is_valid_phone

logger = logging.getLogger(__name__)

# Payment methods that need email and phone before the order can be sent.
# Both methods collect contacts.
CONTACTS_REQUIRED_FOR = frozenset(PAYMENT_METHODS)

ERROR_ADDRESS = "Необходимо указать адрес"
ERROR_PAYMENT = "Выберите способ оплаты"
ERROR_EMAIL = "Введите корректный email"
ERROR_PHONE = "Введите корректный телефон"


@dataclass
class ContactsValidation:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class _DraftFields:
    address: str = ""
    payment: str = ""
    email: str | None = None
    phone: str | None = None


class OrderDraft:
    """Checkout form state shared by the address and contacts steps."""

    def __init__(self, api: ShopApiProtocol):
        self._api = api
        self._fields = _DraftFields()

    # --- Setters ----------------------------------------------------------------

    def set_address(self, address: str) -> None:
        self._fields.address = address

    def set_payment(self, payment: str) -> None:
        self._fields.payment = payment

    def set_email(self, email: str) -> bool:
        self._fields.email = email
        return is_valid_email(email)

    def set_phone(self, phone: str) -> bool:
        self._fields.phone = phone
        return is_valid_phone(phone)

    def set_contacts(self, email: str, phone: str) -> None:
        self._fields.email = email
        self._fields.phone = phone

    # --- Accessors --------------------------------------------------------------

    @property
    def address(self) -> str:
        return self._fields.address

    @property
    def payment(self) -> str:
        return self._fields.payment

    @property
    def email(self) -> str | None:
        return self._fields.email

    @property
    def phone(self) -> str | None:
        return self._fields.phone

    @property
    def requires_contacts(self) -> bool:
        return self._fields.payment in CONTACTS_REQUIRED_FOR

    def get_order_data(self) -> dict[str, Any]:
        return {
            "address": self._fields.address,
            "payment": self._fields.payment,
            "email": self._fields.email,
            "phone": self._fields.phone,
        }

    # --- Validation -------------------------------------------------------------

    def validate_address(self) -> ContactsValidation:
        """Address-and-payment step check."""
        return validate_address_step(self._fields.address, self._fields.payment)

    def validate_contacts(self) -> ContactsValidation:
        errors = []
        if not is_valid_email(self._fields.email):
            errors.append(ERROR_EMAIL)
        if not is_valid_phone(self._fields.phone):
            errors.append(ERROR_PHONE)
        return ContactsValidation(is_valid=not errors, errors=errors)

    def validate(self) -> bool:
        if not self.validate_address().is_valid:
            return False
        if self.requires_contacts and not self.validate_contacts().is_valid:
            return False
        return True

    # --- Submission -------------------------------------------------------------

    async def submit(self) -> OrderResult:
        """
        Send the draft to ``POST /order``.

        Raises:
            IncompleteOrderError: the draft does not validate.
            SubmissionError: the network call failed.
        """
        if not self.validate():
            errors = self.validate_address().errors + self.validate_contacts().errors
            raise IncompleteOrderError(errors or ["Данные заказа неполные"])

        result = await self._api.post_order(self.get_order_data())
        logger.info("Order submitted: id=%s total=%s", result.id, result.total)
        return result

    # --- Lifecycle --------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        return self.get_order_data()

    def restore(self, data: dict[str, Any]) -> None:
        self._fields = _DraftFields(**data)

    def clear(self) -> None:
        self._fields = _DraftFields()


def validate_address_step(address: str, payment: str) -> ContactsValidation:
    errors = []
    if not address or not address.strip():
        errors.append(ERROR_ADDRESS)
    if payment not in PAYMENT_METHODS:
        errors.append(ERROR_PAYMENT)
    return ContactsValidation(is_valid=not errors, errors=errors)
