"""Relation registry: the mapped entity and join condition behind each Relation."""

from sqlalchemy.orm import aliased

from eshop.query.schemas import Relation
from eshop.shop.models import Customer, Order, OrderItem, Payment, Product

# Item/product aliases used only inside the product semi-join, so they never
# correlate with the item/product rows joined for the aggregates.
MatchedItem = aliased(OrderItem, name="matched_item")
MatchedProduct = aliased(Product, name="matched_product")

ENTITIES = {
    Relation.ORDER: Order,
    Relation.CUSTOMER: Customer,
    Relation.ORDER_ITEM: OrderItem,
    Relation.PRODUCT: Product,
    Relation.PAYMENT: Payment,
}

JOIN_CONDITIONS = {
    Relation.CUSTOMER: Order.customer_id == Customer.id,
    Relation.ORDER_ITEM: Order.id == OrderItem.order_id,
    Relation.PRODUCT: OrderItem.product_id == Product.id,
    Relation.PAYMENT: Order.id == Payment.order_id,
}
