"""Order and order item models."""

ORDER_DDL = """
CREATE TABLE IF NOT EXISTS orders (
    id VARCHAR PRIMARY KEY,
    store_id VARCHAR NOT NULL,
    customer_id VARCHAR,
    customer_name VARCHAR,
    status VARCHAR NOT NULL,
    payment_method VARCHAR,
    subtotal DOUBLE NOT NULL DEFAULT 0,
    delivery_fee DOUBLE NOT NULL DEFAULT 0,
    total DOUBLE NOT NULL DEFAULT 0,
    delivery_time DOUBLE,
    created_at TIMESTAMP NOT NULL
)
"""

ORDER_ITEM_DDL = """
CREATE TABLE IF NOT EXISTS order_item (
    order_id VARCHAR NOT NULL,
    product_id VARCHAR NOT NULL,
    name VARCHAR NOT NULL,
    quantity INTEGER NOT NULL,
    price DOUBLE NOT NULL,
    additionals_total DOUBLE NOT NULL DEFAULT 0
)
"""

ORDER_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_orders_store_created ON orders(store_id, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_order_item_order ON order_item(order_id)",
]

ORDER_STATUSES = ("pending", "preparing", "ready", "completed")

PAYMENT_METHOD_NAMES = {
    "money": "Cash",
    "pix": "Pix",
    "credit": "Credit Card",
    "debit": "Debit Card",
    "vrRefeicao": "VR Meal Voucher",
    "ticketRefeicao": "Ticket Meal Voucher",
    "aleloRefeicao": "Alelo Meal Voucher",
    "sodexoRefeicao": "Sodexo Meal Voucher",
}
