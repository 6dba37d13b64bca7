"""Repository for the Order aggregate: customer history and back-office listings."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus

# Upper bound when summing over orders for the dashboard
SCAN_LIMIT = 10000


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id, page=1, limit=10):
        """The customer's orders, newest first. Returns a Protean ResultSet."""
        return (
            self._dao.query.filter(customer_id=str(customer_id))
            .order_by("-created_at")
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

    def find_for_customer(self, order_id, customer_id) -> Order | None:
        """The order, if it exists and belongs to the customer."""
        try:
            order = self.get(order_id)
        except ObjectNotFoundError:
            return None
        return order if order.belongs_to(customer_id) else None

    def search(self, status=None, page=1, limit=20):
        query = self._dao.query.filter(status=status) if status else self._dao.query
        return query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()

    def count(self) -> int:
        return self._dao.query.all().total

    def recent(self, limit=5) -> list[Order]:
        return self._dao.query.order_by("-created_at").limit(limit).all().items

    def delivered_revenue(self) -> float:
        orders = self._dao.query.filter(status=OrderStatus.DELIVERED.value).limit(SCAN_LIMIT).all().items
        return round(sum(o.pricing.total for o in orders if o.pricing), 2)
