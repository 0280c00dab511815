"""New order template: sent to each artisan whose products were ordered."""


class NewOrderTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "New Order Received",
            "message": f"You have received a new order {context.get('order_number', 'N/A')}",
        }
