"""Screen-flow state machine for the storefront.

The controller is the only writer of the basket and the order draft. Every
intent checks its guard against the active screen, mutates the stores and
re-renders into the shared modal surface. Only ``pay`` and catalog loading
suspend; both are safe against the user navigating away mid-flight.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from .errors import LoadError, StorefrontError, SubmissionError, ValidationError
from .models import (
    PAYMENT_METHODS,
    SUCCESS_ORDERED,
    SUCCESS_REMOVED,
    BasketScreen,
    CatalogScreen,
    OrderAddressScreen,
    OrderContactsScreen,
    ProductDetailScreen,
    Screen,
    SuccessScreen,
)
from .services import BasketStore, Catalog, OrderDraft, SubmissionGuard
from .services.order import ERROR_EMAIL, ERROR_PHONE, validate_address_step
from .views import Rendered, StorefrontViews

logger = logging.getLogger(__name__)

MESSAGE_ORDERED = "Заказ оформлен"
MESSAGE_REMOVED = "Товар удалён из корзины"

_CHECKOUT_SCREENS = (OrderAddressScreen, OrderContactsScreen)

Scheduler = Callable[..., Any]


class ModalSurface(Protocol):
    def open(self, content: Rendered) -> None: ...

    def close(self) -> None: ...

    def clear_content(self) -> None: ...


class PageSurface(Protocol):
    def set_page(self, content: Rendered) -> None: ...


def _call_later(delay: float, callback: Callable[..., Any], *args: Any) -> Any:
    return asyncio.get_running_loop().call_later(delay, callback, *args)


class ScreenController:
    def __init__(
        self,
        catalog: Catalog,
        basket: BasketStore,
        draft: OrderDraft,
        modal: ModalSurface,
        page: PageSurface,
        views: StorefrontViews | None = None,
        guard: SubmissionGuard | None = None,
        on_basket_change: Callable[[int], None] | None = None,
        scheduler: Scheduler | None = None,
        success_close_delay: float = 1.0,
    ):
        self._catalog = catalog
        self._basket = basket
        self._draft = draft
        self._modal = modal
        self._page = page
        self._views = views or StorefrontViews()
        self._guard = guard or SubmissionGuard()
        self._on_basket_change = on_basket_change
        self._schedule = scheduler or _call_later
        self._success_close_delay = success_close_delay

        self._screen: Screen = CatalogScreen()

        # Unsaved input of the address step; written to the draft on next()
        self._address_input = ""
        self._payment_input = ""
        self._step_errors: list[str] = []
        self._draft_before_checkout: dict[str, Any] | None = None

    # --- Read-only state --------------------------------------------------------

    @property
    def screen(self) -> Screen:
        return self._screen

    @property
    def basket_count(self) -> int:
        return self._basket.count

    @property
    def submission_pending(self) -> bool:
        return self._guard.in_flight

    # --- Catalog ----------------------------------------------------------------

    async def load_catalog(self) -> bool:
        """Fetch the catalog. A LoadError leaves it empty with a reload control."""
        return await self._fetch_catalog(self._catalog.load)

    async def reload_catalog(self) -> bool:
        return await self._fetch_catalog(self._catalog.reload)

    async def _fetch_catalog(self, fetch: Callable[[], Awaitable[Any]]) -> bool:
        try:
            await fetch()
        except LoadError as e:
            logger.warning("Catalog load failed: %s", e)
            self._render_page()
            return False
        self._render_page()
        return True

    def show_catalog(self) -> None:
        self._set_screen(CatalogScreen())

    # --- Product detail ---------------------------------------------------------

    def open_product(self, product_id: str) -> bool:
        product = self._catalog.get(product_id)
        if product is None:
            logger.debug("open_product: unknown id %s", product_id)
            return False
        self._set_screen(ProductDetailScreen(product))
        return True

    def toggle_basket(self) -> bool:
        screen = self._screen
        if not isinstance(screen, ProductDetailScreen):
            return False
        product = screen.product
        if not product.is_available:
            return False
        if self._basket.has(product.id):
            self._basket.remove(product.id)
        else:
            self._basket.add(product)
        self._basket_changed()
        self._render()
        return True

    def confirm_remove(self) -> bool:
        screen = self._screen
        if not isinstance(screen, ProductDetailScreen) or not self._basket.has(screen.product.id):
            return False
        self._basket.remove(screen.product.id)
        self._basket_changed()
        notice = SuccessScreen(MESSAGE_REMOVED, kind=SUCCESS_REMOVED)
        self._set_screen(notice)
        self._schedule(self._success_close_delay, self._auto_return, notice)
        return True

    def _auto_return(self, notice: SuccessScreen) -> None:
        # Only if the user has not moved on in the meantime
        if self._screen is notice:
            self._set_screen(CatalogScreen())

    # --- Basket -----------------------------------------------------------------

    def open_basket(self) -> None:
        self._set_screen(BasketScreen())

    def remove_from_basket(self, product_id: str) -> bool:
        if not isinstance(self._screen, BasketScreen):
            return False
        if self._basket.remove(product_id):
            self._basket_changed()
        self._render()
        return True

    def checkout(self) -> bool:
        if not isinstance(self._screen, BasketScreen):
            return False
        if self._basket.is_empty or self._basket.get_total() <= 0:
            logger.debug("checkout rejected: empty or zero-value basket")
            return False
        self._draft_before_checkout = self._draft.snapshot()
        self._address_input = self._draft.address
        self._payment_input = self._draft.payment
        self._step_errors = []
        self._set_screen(OrderAddressScreen())
        return True

    # --- Address and payment step -----------------------------------------------

    def set_address(self, address: str) -> bool:
        if not isinstance(self._screen, OrderAddressScreen):
            return False
        self._address_input = address
        self._step_errors = []
        self._render()
        return True

    def set_payment(self, payment: str) -> bool:
        if not isinstance(self._screen, OrderAddressScreen) or payment not in PAYMENT_METHODS:
            return False
        self._payment_input = payment
        self._step_errors = []
        self._render()
        return True

    def next(self) -> bool:
        if not isinstance(self._screen, OrderAddressScreen):
            return False
        result = validate_address_step(self._address_input, self._payment_input)
        if not result.is_valid:
            self._step_errors = result.errors
            self._render()
            return False
        self._draft.set_address(self._address_input.strip())
        self._draft.set_payment(self._payment_input)
        self._step_errors = []
        self._set_screen(OrderContactsScreen())
        return True

    # --- Contacts step ----------------------------------------------------------

    def set_email(self, email: str) -> bool:
        if not isinstance(self._screen, OrderContactsScreen):
            return False
        valid = self._draft.set_email(email.strip())
        self._refresh_contact_errors()
        self._render()
        return valid

    def set_phone(self, phone: str) -> bool:
        if not isinstance(self._screen, OrderContactsScreen):
            return False
        valid = self._draft.set_phone(phone.strip())
        self._refresh_contact_errors()
        self._render()
        return valid

    def _refresh_contact_errors(self) -> None:
        # Only complain about fields the user has already filled in
        errors = self._draft.validate_contacts().errors
        touched = []
        if self._draft.email is not None:
            touched.extend(e for e in errors if e == ERROR_EMAIL)
        if self._draft.phone is not None:
            touched.extend(e for e in errors if e == ERROR_PHONE)
        self._step_errors = touched

    async def pay(self) -> bool:
        """
        Submit the order once. Returns True when the order was accepted and
        the Success screen is shown.
        """
        if not isinstance(self._screen, OrderContactsScreen):
            return False
        if self._guard.in_flight:
            logger.info("pay ignored: submission already in flight")
            return False

        contacts = self._draft.validate_contacts()
        if not contacts.is_valid:
            self._step_errors = contacts.errors
            self._render()
            return False
        self._draft.set_contacts(self._draft.email or "", self._draft.phone or "")

        token = self._guard.begin()
        self._step_errors = []
        self._render()
        failure: StorefrontError | None = None
        try:
            await self._draft.submit()
        except (ValidationError, SubmissionError) as e:
            failure = e
        finally:
            self._guard.finish(token)

        if not self._guard.is_current(token):
            logger.info("Dropping stale submission response (generation %d)", token)
            if isinstance(self._screen, OrderContactsScreen):
                # The form was re-entered while this request was pending
                self._render()
            return False
        if failure is not None:
            logger.warning("Order not submitted: %s", failure)
            if isinstance(failure, ValidationError):
                self._step_errors = failure.errors
            else:
                self._step_errors = [str(failure)]
            self._render()
            return False

        total = self._basket.get_total()
        self._basket.clear()
        self._draft.clear()
        self._draft_before_checkout = None
        self._basket_changed()
        self._set_screen(SuccessScreen(MESSAGE_ORDERED, total=total, kind=SUCCESS_ORDERED))
        return True

    # --- Success and dismissal --------------------------------------------------

    def close(self) -> bool:
        screen = self._screen
        if not isinstance(screen, SuccessScreen):
            return False
        if screen.kind == SUCCESS_ORDERED:
            self._basket.clear()
            self._draft.clear()
            self._basket_changed()
        self._set_screen(CatalogScreen())
        return True

    def dismiss(self) -> None:
        """Close button, outside click or cancel key: back to the catalog."""
        if isinstance(self._screen, CatalogScreen):
            return
        self._set_screen(CatalogScreen())

    # --- Transitions and rendering ----------------------------------------------

    def _set_screen(self, screen: Screen) -> None:
        previous = self._screen
        if isinstance(previous, _CHECKOUT_SCREENS) and not isinstance(
            screen, _CHECKOUT_SCREENS + (SuccessScreen,)
        ):
            self._abandon_checkout()
        logger.debug("screen %s -> %s", type(previous).__name__, type(screen).__name__)
        self._screen = screen
        self._render()

    def _abandon_checkout(self) -> None:
        self._guard.invalidate()
        if self._draft_before_checkout is not None:
            self._draft.restore(self._draft_before_checkout)
        else:
            self._draft.clear()
        self._draft_before_checkout = None
        self._address_input = ""
        self._payment_input = ""
        self._step_errors = []
        logger.debug("checkout abandoned")

    def _render(self) -> None:
        # One shared modal: always close and clear before showing new content
        self._modal.close()
        self._modal.clear_content()
        if isinstance(self._screen, CatalogScreen):
            self._render_page()
            return
        self._modal.open(self._render_screen(self._screen))

    def _render_page(self) -> None:
        error = self._catalog.last_error
        self._page.set_page(
            self._views.catalog(self._catalog.get_all(), error=str(error) if error else None)
        )

    def _render_screen(self, screen: Screen) -> Rendered:
        views = self._views
        if isinstance(screen, ProductDetailScreen):
            return views.product_detail(screen.product, self._basket.has(screen.product.id))
        if isinstance(screen, BasketScreen):
            return views.basket(self._basket.get_all(), self._basket.get_total())
        if isinstance(screen, OrderAddressScreen):
            can_advance = validate_address_step(self._address_input, self._payment_input).is_valid
            return views.order_address(
                self._address_input, self._payment_input, self._step_errors, can_advance
            )
        if isinstance(screen, OrderContactsScreen):
            pending = self._guard.in_flight
            can_pay = self._draft.validate_contacts().is_valid and not pending
            return views.order_contacts(
                self._draft.email, self._draft.phone, self._step_errors, can_pay, pending
            )
        if isinstance(screen, SuccessScreen):
            total = screen.total if screen.kind == SUCCESS_ORDERED else None
            return views.success(screen.message, total)
        raise ValueError(f"no modal content for {screen!r}")

    def _basket_changed(self) -> None:
        if self._on_basket_change is not None:
            self._on_basket_change(self._basket.count)
