"""
Contact Module - Inbound contact-form messages.
"""

from src.contact.service import ContactForm, list_contact_messages, submit_contact_form, update_message_status

__all__ = [
    "ContactForm",
    "list_contact_messages",
    "submit_contact_form",
    "update_message_status",
]
