# utils/forecast/contact.py

"""
Supplier contact links
Builds the prefilled WhatsApp message and wa.me URI for a supplier and
a short ingredient. No backend call is made here.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from utils.config import config

from .constants import CONTACT_MESSAGE_TEMPLATE, WHATSAPP_BASE_URL
from .models import ShortageNode, Supplier

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r'\D')


@dataclass(frozen=True)
class ContactAction:
    """A ready-to-open outbound contact link"""
    uri: str
    message: str
    notice: str
    supplier_id: str
    item_id: Optional[str]


def sanitize_phone(number: Optional[str]) -> str:
    """Keep only the digits of a phone number, in order"""
    return _NON_DIGITS.sub('', number or '')


def build_contact_message(
    supplier: Supplier,
    item: ShortageNode,
    business_name: Optional[str] = None
) -> str:
    return CONTACT_MESSAGE_TEMPLATE.format(
        supplier_name=supplier.name,
        business_name=business_name or config.business_name,
        item_name=item.name
    )


def build_contact_uri(
    supplier: Supplier,
    item: ShortageNode,
    business_name: Optional[str] = None
) -> str:
    """https://wa.me/<digits>?text=<percent-encoded message>"""
    message = build_contact_message(supplier, item, business_name)
    phone = sanitize_phone(supplier.whatsapp_number)
    return f"{WHATSAPP_BASE_URL}{phone}?text={quote(message, safe='')}"


def dispatch_contact(
    supplier: Supplier,
    item: ShortageNode,
    business_name: Optional[str] = None
) -> ContactAction:
    """Prepare the contact link and the notice shown when it is opened"""
    if not sanitize_phone(supplier.whatsapp_number):
        logger.warning(f"Supplier {supplier.id} has no WhatsApp digits")

    action = ContactAction(
        uri=build_contact_uri(supplier, item, business_name),
        message=build_contact_message(supplier, item, business_name),
        notice=f"Opening WhatsApp chat with {supplier.name} for {item.name}",
        supplier_id=supplier.id,
        item_id=item.id
    )
    logger.info(f"Contact link prepared: supplier={supplier.id} item={item.id}")
    return action
