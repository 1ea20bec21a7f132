"""Email service for account, order, budget and cart notifications via SMTP."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from decimal import Decimal
from email.message import EmailMessage
from html import escape
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.config import settings
from app.repositories.customer_repository import CustomerRepository
from app.services.activity_log_service import EMAIL_SENT, ActivityLogService

if TYPE_CHECKING:
    from app.models.budget import Budget
    from app.models.customer import Customer
    from app.models.order import Order

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ORDER_STATUS_LABELS = {
    "pending": "Pendente",
    "quotation": "Em Cotação",
    "quoted": "Cotado",
    "confirmed": "Confirmado",
    "processing": "Em Processamento",
    "ready": "Pronto para Entrega",
    "shipped": "Enviado",
    "delivered": "Entregue",
    "cancelled": "Cancelado",
    "rejected": "Rejeitado",
}

BUDGET_STATUS_LABELS = {
    "draft": "Rascunho",
    "sent": "Enviado",
    "accepted": "Aceito",
    "rejected": "Rejeitado",
    "expired": "Expirado",
}

BUDGET_STATUS_MESSAGES = {
    "accepted": "Parabéns! Seu orçamento foi aceito e estará em processamento.",
    "rejected": "Lamentamos informar que seu orçamento foi rejeitado.",
    "expired": "Informamos que seu orçamento expirou e não está mais disponível.",
    "sent": "Seu orçamento foi enviado para sua análise.",
}


def is_valid_email(email: str | None) -> bool:
    return bool(email) and _EMAIL_RE.match(str(email)) is not None


def mask_email(email: str | None) -> str:
    """Mask an address for logging: john.doe@example.com -> j***@example.com."""
    if not email or "@" not in email:
        return "***"
    username, _, domain = email.partition("@")
    masked = username[0] + "***" if len(username) > 2 else "***"
    return f"{masked}@{domain}"


def _format_amount(value: object) -> str:
    """Format a monetary amount to two decimal places."""
    if value is None:
        return "0.00"
    return f"{Decimal(str(value)):.2f}"


def _short_id(value: object) -> str:
    return str(value)[:8]


def _customer_name(name: object) -> str:
    return escape(str(name)) if name else "Cliente"


def _items_table(items: Sequence[dict[str, Any]]) -> str:
    rows = "".join(
        f"<tr><td>{escape(str(item.get('name', '')))}</td>"
        f"<td>{escape(str(item.get('quantity', '')))}</td>"
        f"<td>{settings.STORE_CURRENCY} {_format_amount(item.get('price'))}</td></tr>"
        for item in items
    )
    return (
        "<table><tr><th>Produto</th><th>Quantidade</th><th>Preço</th></tr>"
        f"{rows}</table>"
    )


class EmailService:
    """Service for sending transactional emails via SMTP.

    Each ``send_*`` method returns True when the message was handed to the
    SMTP server (or logged in no-op mode) and False when it could not be
    addressed. Transport errors propagate to the caller.
    """

    def __init__(self, db: Session | None = None):
        self.db = db

    async def send_email(self, to: str, subject: str, html_body: str) -> bool:
        """Send an email via SMTP.

        Args:
            to: Recipient email address.
            subject: Email subject line.
            html_body: HTML content of the email.

        Returns:
            True if sent successfully (or no-op when SMTP unconfigured).
        """
        if not is_valid_email(to):
            logger.warning("Invalid email address %s, skipping: %s", mask_email(to), subject)
            return False

        if not settings.SMTP_HOST:
            logger.info("SMTP not configured, skipping email to %s: %s", mask_email(to), subject)
            return True

        import aiosmtplib

        msg = EmailMessage()
        msg["From"] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("Por favor, visualize este e-mail em um cliente compatível com HTML.")
        msg.add_alternative(html_body, subtype="html")

        await aiosmtplib.send(
            msg,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME or None,
            password=settings.SMTP_PASSWORD or None,
            start_tls=settings.SMTP_USE_TLS,
        )
        logger.info("Email sent to %s: %s", mask_email(to), subject)
        return True

    def _record_sent(self, user_id: object, details: dict[str, Any]) -> None:
        if self.db is None or not user_id:
            return
        ActivityLogService(self.db).log_activity(str(user_id), EMAIL_SENT, details)

    def _customer_email(self, customer_id: UUID) -> str | None:
        if self.db is None:
            return None
        customer = CustomerRepository(self.db).get_by_id(customer_id)
        if not customer:
            logger.warning("Customer %s not found, no email address available", customer_id)
            return None
        return str(customer.email)

    async def send_welcome_email(self, customer: Customer) -> bool:
        """Greet a customer who just registered."""
        html_body = (
            f"<h2>Bem-vindo(a) à {escape(settings.SMTP_FROM_NAME)}, "
            f"{_customer_name(customer.name)}!</h2>"
            "<p>Estamos muito felizes em tê-lo(a) conosco.</p>"
            "<p>Agora você pode explorar nossa variedade de pedras ornamentais, "
            "bloquetes e serviços de jardinagem.</p>"
            f'<p><a href="https://{settings.APP_DOMAIN}/shop">Visitar a loja</a></p>'
        )
        sent = await self.send_email(
            to=str(customer.email),
            subject=f"Bem-vindo(a) à {settings.SMTP_FROM_NAME}!",
            html_body=html_body,
        )
        if sent:
            self._record_sent(customer.id, {"type": "WELCOME"})
        return sent

    async def send_order_confirmation(self, order: Order) -> bool:
        """Send the confirmation email for a newly placed order."""
        user_info = order.user_info or {}
        html_body = (
            f"<h2>Pedido #{_short_id(order.id)} recebido</h2>"
            f"<p>Olá {_customer_name(user_info.get('name'))},</p>"
            "<p>Recebemos o seu pedido. Confira o resumo abaixo.</p>"
            f"{_items_table(order.items or [])}"
            f"<p><strong>Total:</strong> {settings.STORE_CURRENCY} "
            f"{_format_amount(order.total)}</p>"
            "<p>Você receberá atualizações sobre o status do seu pedido por e-mail.</p>"
        )
        sent = await self.send_email(
            to=str(user_info.get("email", "")),
            subject=f"Confirmação do Pedido #{_short_id(order.id)}",
            html_body=html_body,
        )
        if sent:
            self._record_sent(
                order.user_id, {"type": "ORDER_CONFIRMATION", "order_id": str(order.id)}
            )
        return sent

    async def send_order_status_update(self, order: Order) -> bool:
        """Tell the customer their order moved to a new status."""
        user_info = order.user_info or {}
        status = str(order.status)
        label = ORDER_STATUS_LABELS.get(status, status)
        html_body = (
            f"<h2>Atualização do Pedido #{_short_id(order.id)}</h2>"
            f"<p>Olá {_customer_name(user_info.get('name'))},</p>"
            f"<p>O status do seu pedido foi atualizado para: <strong>{label}</strong>.</p>"
        )
        sent = await self.send_email(
            to=str(user_info.get("email", "")),
            subject=f"Atualização do Pedido #{_short_id(order.id)}",
            html_body=html_body,
        )
        if sent:
            self._record_sent(
                order.user_id,
                {"type": "ORDER_STATUS_UPDATE", "order_id": str(order.id), "status": status},
            )
        return sent

    async def send_budget_notification(self, budget: Budget) -> bool:
        """Send a newly created budget to its customer."""
        recipient = self._customer_email(budget.customer_id)  # type: ignore[arg-type]
        if not recipient:
            logger.warning(
                "Cannot send budget notification: no email for customer %s", budget.customer_id
            )
            return False

        html_body = (
            f"<h2>Orçamento #{_short_id(budget.id)}</h2>"
            "<p>Preparamos um orçamento para você.</p>"
            f"{_items_table(budget.items or [])}"
            f"<p><strong>Total:</strong> {settings.STORE_CURRENCY} "
            f"{_format_amount(budget.total)}</p>"
            f"<p>Válido até {str(budget.valid_until)[:10]}.</p>"
        )
        sent = await self.send_email(
            to=recipient,
            subject=f"Orçamento #{_short_id(budget.id)} criado",
            html_body=html_body,
        )
        if sent:
            self._record_sent(
                budget.created_by,
                {
                    "type": "BUDGET_NOTIFICATION",
                    "budget_id": str(budget.id),
                    "customer_id": str(budget.customer_id),
                    "customer_email": mask_email(recipient),
                },
            )
        return sent

    async def send_budget_status_update(self, budget: Budget) -> bool:
        """Tell the customer their budget moved to a new status."""
        recipient = self._customer_email(budget.customer_id)  # type: ignore[arg-type]
        if not recipient:
            logger.warning(
                "Cannot send budget status update: no email for customer %s", budget.customer_id
            )
            return False

        status = str(budget.status)
        label = BUDGET_STATUS_LABELS.get(status, status)
        message = BUDGET_STATUS_MESSAGES.get(
            status, f"Seu orçamento foi atualizado para o status: {label}."
        )
        html_body = (
            f"<h2>Atualização de Orçamento #{_short_id(budget.id)}</h2>"
            f"<p>O status do seu orçamento foi atualizado para: <strong>{label}</strong>.</p>"
            f"<p>{message}</p>"
        )
        sent = await self.send_email(
            to=recipient,
            subject=f"Atualização de Orçamento #{_short_id(budget.id)}",
            html_body=html_body,
        )
        if sent:
            self._record_sent(
                budget.created_by,
                {
                    "type": "BUDGET_STATUS_UPDATE",
                    "budget_id": str(budget.id),
                    "status": status,
                    "customer_id": str(budget.customer_id),
                    "customer_email": mask_email(recipient),
                },
            )
        return sent

    async def send_abandoned_cart_email(
        self, customer: Customer, items: Sequence[dict[str, Any]]
    ) -> bool:
        """Remind a customer about the items left in their cart."""
        checkout_url = f"https://{settings.APP_DOMAIN}/cart"
        html_body = (
            f"<h2>Olá {_customer_name(customer.name)},</h2>"
            "<p>Você deixou alguns itens no seu carrinho:</p>"
            f"{_items_table(items)}"
            f'<p><a href="{checkout_url}">Finalizar compra</a></p>'
        )
        sent = await self.send_email(
            to=str(customer.email),
            subject="Você esqueceu itens no seu carrinho!",
            html_body=html_body,
        )
        if sent:
            self._record_sent(customer.id, {"type": "ABANDONED_CART"})
        return sent
