"""
MedMall Back Office - Order Ledger Services
============================================

What:  Read and write access to order line items, payments and refunds.
Who:   Called by the /api/orderitems, /api/payments and /api/refunds routes.

Operations:
    OrderItems  list (optional order filter)
    Payments    list (newest pay_time first), create
    Refunds     list (newest first), create, update

Refund.status is copied verbatim on update; this service enforces no
Pending → Processing → Success/Failed transition rules.
"""

from datetime import datetime

from medmall.models.orders import OrderItem, Payment, Refund
from medmall.services.base import ResourceService, is_unset


class OrderItemService(ResourceService[OrderItem]):
    model = OrderItem
    resource_name = "order item"


class PaymentService(ResourceService[Payment]):
    model = Payment
    resource_name = "payment"

    def ordering(self):
        # Payments still awaiting a callback have no pay_time; keep them last
        return (Payment.pay_time.desc().nulls_last(),)


class RefundService(ResourceService[Refund]):
    model = Refund
    resource_name = "refund"
    update_fields = ("status", "refund_method", "channel_refund_no", "completed_at")

    def ordering(self):
        return (Refund.created_at.desc(),)

    def prepare_new(self, entity: Refund, now: datetime) -> None:
        if is_unset(entity.initiated_at):
            entity.initiated_at = now


order_item_service = OrderItemService()
payment_service = PaymentService()
refund_service = RefundService()
