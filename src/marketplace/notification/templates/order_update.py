"""Order update template: sent to the customer when an artisan changes status."""


class OrderUpdateTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        message = f"Your order {order_number} has been {context.get('new_status', 'updated')}"
        if context.get("tracking_number"):
            message += f". Tracking number: {context['tracking_number']}"
        return {"title": "Order Status Updated", "message": message}
