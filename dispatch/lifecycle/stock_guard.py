"""Stock availability guard, run once when an order is created."""

from uuid import UUID

from dispatch.lifecycle.errors import ItemNotApproved, ItemNotFound, OutOfStock
from dispatch.models.stock import StockItem


def check_stock(
    seller_id: UUID,
    item_name: str,
    quantity: int,
    stock_item: StockItem | None,
) -> StockItem:
    """
    Verify the seller's stock can back a new order.

    Args:
        seller_id: Seller the order will belong to
        item_name: Requested item
        quantity: Requested quantity
        stock_item: The seller's stock line for ``item_name``, or None

    Returns:
        The matching stock item, unchanged

    Raises:
        ItemNotFound: No stock line for this seller and item
        ItemNotApproved: The line exists but is not approved
        OutOfStock: ``quantity`` exceeds the stocked quantity
    """
    if (
        stock_item is None
        or stock_item.seller_id != seller_id
        or stock_item.item_name != item_name
    ):
        raise ItemNotFound(f"No stock for item '{item_name}'")

    if not stock_item.approved:
        raise ItemNotApproved(f"Stock for item '{item_name}' is awaiting approval")

    if quantity > stock_item.quantity:
        raise OutOfStock(available=stock_item.quantity)

    return stock_item
