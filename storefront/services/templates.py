"""
Email templates.

HTML bodies escape every interpolated value; plain-text bodies are
sent alongside for clients without HTML.
"""
from datetime import datetime
from html import escape

from storefront.models import OrderDetails
from storefront.services.money import format_money, percent_off, Number


def _long_date(value: datetime) -> str:
    return f"{value:%A, %B} {value.day}, {value.year}"


def _short_date(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}"


# ============================================================
# Order confirmation
# ============================================================

def order_confirmation_subject(order: OrderDetails) -> str:
    return f"Order Confirmation - {order.order_id}"


def order_confirmation_html(order: OrderDetails) -> str:
    customer = order.customer
    rows = "".join(
        f"""
                    <tr>
                        <td>
                            <img src="{escape(item.image or '')}" alt="{escape(item.name)}" class="item-image">
                            <strong>{escape(item.name)}</strong>
                        </td>
                        <td>{item.quantity}</td>
                        <td>{format_money(item.price)}</td>
                        <td>{format_money(item.line_total)}</td>
                    </tr>"""
        for item in order.items
    )
    note = (
        f"<p><strong>Special Instructions:</strong> {escape(customer.note)}</p>"
        if customer.note
        else ""
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Order Confirmation</title>
    <style>
        body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; background-color: #f4f4f4; }}
        .container {{ background-color: white; padding: 30px; border-radius: 10px; }}
        .header {{ text-align: center; border-bottom: 3px solid #4CAF50; padding-bottom: 20px; margin-bottom: 30px; }}
        .header h1 {{ color: #4CAF50; margin: 0; font-size: 28px; }}
        .order-info {{ background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin-bottom: 20px; }}
        .items-table {{ width: 100%; border-collapse: collapse; margin: 20px 0; }}
        .items-table th, .items-table td {{ padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }}
        .item-image {{ width: 50px; height: 50px; object-fit: cover; border-radius: 5px; }}
        .total-section {{ background-color: #4CAF50; color: white; padding: 20px; border-radius: 8px; text-align: center; margin: 20px 0; }}
        .total-amount {{ font-size: 24px; font-weight: bold; margin: 10px 0; }}
        .delivery-info {{ background-color: #e8f5e8; padding: 20px; border-radius: 8px; margin: 20px 0; }}
        .footer {{ text-align: center; margin-top: 30px; padding-top: 20px; border-top: 1px solid #ddd; color: #666; font-size: 14px; }}
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>Order Confirmed!</h1>
            <p>Thank you for your order. We've received your order and will deliver it to your address.</p>
        </div>

        <div class="order-info">
            <h2>Order Information</h2>
            <p><strong>Order ID:</strong> {escape(order.order_id)}</p>
            <p><strong>Order Date:</strong> {_short_date(order.order_date)}</p>
            <p><strong>Payment Method:</strong> {escape(order.payment_method)}</p>
            <p><strong>Total Amount:</strong> {format_money(order.total)}</p>
        </div>

        <div class="delivery-info">
            <h3>Delivery Information</h3>
            <p><strong>Delivery Address:</strong></p>
            <p>
                {escape(customer.full_name)}<br>
                {escape(customer.delivery_address)}<br>
                {escape(customer.city)}, {escape(customer.province)}
            </p>
            <p><strong>Contact:</strong> {escape(customer.phone_number)}</p>
            {note}
            <p><strong>Expected Delivery:</strong> {_long_date(order.estimated_delivery)}</p>
        </div>

        <h2>Order Items</h2>
        <table class="items-table">
            <thead>
                <tr><th>Item</th><th>Quantity</th><th>Price</th><th>Total</th></tr>
            </thead>
            <tbody>{rows}
            </tbody>
        </table>

        <div class="total-section">
            <h3>Order Total</h3>
            <div class="total-amount">{format_money(order.total)}</div>
            <p>Cash on Delivery - Pay when you receive your order</p>
        </div>

        <div class="footer">
            <p>Thank you for choosing our store!</p>
            <p>This is an automated email. Please do not reply to this message.</p>
        </div>
    </div>
</body>
</html>
"""


def order_confirmation_text(order: OrderDetails) -> str:
    customer = order.customer
    items = "\n".join(
        f"• {item.name} x{item.quantity} - {format_money(item.line_total)}" for item in order.items
    )
    note = f"Special Instructions: {customer.note}\n" if customer.note else ""

    return f"""ORDER CONFIRMATION

Thank you for your order! We've received your order and will deliver it to your address.

ORDER INFORMATION
================
Order ID: {order.order_id}
Order Date: {_short_date(order.order_date)}
Payment Method: {order.payment_method}
Total Amount: {format_money(order.total)}

DELIVERY INFORMATION
===================
Delivery Address:
{customer.full_name}
{customer.delivery_address}
{customer.city}, {customer.province}

Contact: {customer.phone_number}
{note}
Expected Delivery: {_long_date(order.estimated_delivery)}

ORDER ITEMS
===========
{items}

TOTAL: {format_money(order.total)}
Payment: Cash on Delivery - Pay when you receive your order

Thank you for choosing our store!
"""


# ============================================================
# Alerts
# ============================================================

def price_drop_html(product_name: str, old_price: Number, new_price: Number) -> str:
    return f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #FF6B6B;">Price Drop Alert!</h2>
  <p>Great news! The price of an item you're interested in has dropped.</p>
  <div style="background-color: #fff3cd; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #ffc107;">
    <h3 style="margin-top: 0;">{escape(product_name)}</h3>
    <p style="font-size: 18px; margin: 10px 0;">
      <span style="text-decoration: line-through; color: #666;">{format_money(old_price)}</span>
      <span style="color: #28a745; font-weight: bold; margin-left: 10px;">{format_money(new_price)}</span>
    </p>
    <p style="color: #28a745; font-weight: bold;">Save {percent_off(old_price, new_price)}%!</p>
  </div>
  <p>Don't miss out on this great deal!</p>
</div>
"""


def price_drop_text(product_name: str, old_price: Number, new_price: Number) -> str:
    return f"""Price Drop Alert!

Great news! The price of an item you're interested in has dropped.

{product_name}
Was: {format_money(old_price)}
Now: {format_money(new_price)}
Save {percent_off(old_price, new_price)}%!

Don't miss out on this great deal!
"""


def new_product_html(product_name: str, description: str, price: Number) -> str:
    return f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #4CAF50;">New Product Alert!</h2>
  <p>We've just added a new product that might interest you!</p>
  <div style="background-color: #e8f5e8; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h3 style="margin-top: 0;">{escape(product_name)}</h3>
    <p style="color: #666; margin: 10px 0;">{escape(description or '')}</p>
    <p style="font-size: 18px; color: #4CAF50; font-weight: bold;">{format_money(price)}</p>
  </div>
  <p>Check it out and see if it's something you'd like to add to your cart!</p>
</div>
"""


def new_product_text(product_name: str, description: str, price: Number) -> str:
    return f"""New Product Alert!

We've just added a new product that might interest you!

{product_name}
{description or ''}
Price: {format_money(price)}

Check it out and see if it's something you'd like to add to your cart!
"""


def marketing_html(content_html: str) -> str:
    """Wrap campaign content (trusted HTML authored by staff) with the unsubscribe footer."""
    return f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #4CAF50;">Special Offer!</h2>
  <div style="line-height: 1.6;">
    {content_html}
  </div>
  <p style="margin-top: 30px; color: #666; font-size: 14px;">
    You're receiving this email because you subscribed to our marketing emails.
    <a href="#" style="color: #4CAF50;">Unsubscribe</a>
  </p>
</div>
"""
