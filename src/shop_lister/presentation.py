"""
Text rendering of loader state for the terminal
"""

from datetime import datetime
from typing import Callable, Generic, List, TypeVar

from shop_lister.list_loader import LoaderSnapshot
from shop_lister.models import Customer, Order


T = TypeVar('T')

NO_CUSTOMERS_MESSAGE = (
    "No users found. Try searching for a user by email or check your settings."
)
NO_ORDERS_MESSAGE = "No orders found."


def format_date(value: str) -> str:
    """Show only the date part of an ISO timestamp; leave anything else untouched"""
    if not value:
        return "-"
    try:
        return datetime.fromisoformat(value).date().isoformat()
    except ValueError:
        return value


def format_order(order: Order) -> str:
    return (
        f"Order #{order.number}  [{order.status}]\n"
        f"    Customer ID: {order.customer_id}  Total: {order.total}  "
        f"Date: {format_date(order.date_created)}"
    )


def format_customer(customer: Customer) -> str:
    name = customer.full_name or customer.username or "(no name)"
    return f"{name} <{customer.email}>  ID: {customer.id}"


def format_error(message: str) -> str:
    """Error banner"""
    return f"{'!' * 70}\nError\n{message}\n{'!' * 70}"


class ListView(Generic[T]):
    """
    Renders an append-only list incrementally

    Items already shown are not printed again, so each call to ``render``
    only outputs what the last page added, followed by the error banner if
    the last request failed.
    """

    def __init__(self, title: str, formatter: Callable[[T], str],
                 output: Callable[[str], None] = print):
        self.title = title
        self.formatter = formatter
        self.output = output
        self.shown = 0
        self._title_shown = False

    def show_title(self) -> None:
        if not self._title_shown:
            self.output(self.title)
            self.output("=" * 70)
            self._title_shown = True

    def show_loading(self, page: int) -> None:
        self.output(f"Loading page {page}...")

    def restart(self) -> None:
        """Forget what was shown, for a new search"""
        self.shown = 0

    def render(self, snapshot: LoaderSnapshot[T]) -> List[str]:
        """
        Output the items added since the previous render

        Args:
            snapshot: Current loader state

        Returns:
            The lines written, in order
        """
        self.show_title()

        lines = [self.formatter(item) for item in snapshot.items[self.shown:]]
        self.shown = len(snapshot.items)

        if snapshot.error:
            lines.append(format_error(snapshot.error))

        for line in lines:
            self.output(line)
        return lines

    def summary(self, snapshot: LoaderSnapshot[T]) -> str:
        more = "more available" if snapshot.has_more else "end of list"
        line = f"{len(snapshot.items)} shown, page {snapshot.current_page}, {more}"
        self.output(line)
        return line
