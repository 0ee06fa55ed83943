"""Validation of raw gift input before it reaches the store."""

from datetime import date
from decimal import Decimal, InvalidOperation
from uuid import UUID

from pydantic import BaseModel, Field

from .errors import GiftValidationError
from .models import Category, Gift, GiftStatus, Recipient


def parse_price(text: str) -> Decimal:
    """Parse a price entered as text.

    Raises:
        GiftValidationError: If the text is not a finite, non-negative number
    """
    try:
        price = Decimal(text.strip())
    except InvalidOperation:
        raise GiftValidationError("price", "Invalid price value.") from None
    if not price.is_finite() or price < 0:
        raise GiftValidationError("price", "Invalid price value.")
    return price


class GiftInput(BaseModel):
    """Unvalidated gift form data.

    ``recipient`` and ``category`` are None until the user selects one.
    """

    name: str = ""
    description: str = ""
    price: str = ""
    store: str = ""
    status: GiftStatus = GiftStatus.PENDING
    purchase_date: date = Field(default_factory=date.today)
    recipient: Recipient | None = None
    category: Category | None = None

    def build_gift(self, gift_id: UUID | None = None) -> Gift:
        """Validate the input and build a Gift.

        Checks run in a fixed order and the first failure is raised.

        Args:
            gift_id: ID to keep when editing an existing gift

        Returns:
            New Gift holding copies of the selected recipient and category

        Raises:
            GiftValidationError: If any field is invalid
        """
        if not self.name.strip():
            raise GiftValidationError("name", "Gift name cannot be empty.")
        price = parse_price(self.price)
        if self.recipient is None:
            raise GiftValidationError("recipient", "Please select a recipient.")
        if self.category is None:
            raise GiftValidationError("category", "Please select a category.")

        fields = dict(
            name=self.name,
            description=self.description,
            status=self.status,
            price=price,
            store=self.store,
            purchase_date=self.purchase_date,
            recipient=self.recipient.model_copy(),
            category=self.category.model_copy(),
        )
        if gift_id is not None:
            fields["id"] = gift_id
        return Gift(**fields)

    @classmethod
    def from_gift(cls, gift: Gift) -> "GiftInput":
        """Prefill input from an existing gift, as an edit form would."""
        return cls(
            name=gift.name,
            description=gift.description,
            price=str(gift.price),
            store=gift.store,
            status=gift.status,
            purchase_date=gift.purchase_date,
            recipient=gift.recipient,
            category=gift.category,
        )
