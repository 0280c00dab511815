"""Order cancelled template: sent to each artisan when the customer cancels."""


class OrderCancelledTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Order Cancelled",
            "message": f"Order {context.get('order_number', 'N/A')} has been cancelled by the customer",
        }
