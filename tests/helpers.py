"""Payload builders and message inspection helpers for tests."""

from __future__ import annotations

from app.core.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "smtp_host": "mail.test.local",
        "smtp_port": 465,
        "smtp_username": "info@lwa.example.com",
        "smtp_password": "secret",
        "business_email": "owner@lwa.example.com",
        "allowed_origins": "https://lwa.example.com,http://localhost:3000",
        "smtp_verify_on_startup": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def valid_booking(**overrides) -> dict:
    payload = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "date": "2025-03-03",
        "time": "10:30 AM",
    }
    payload.update(overrides)
    return payload


def valid_contact(**overrides) -> dict:
    payload = {
        "name": "Bob",
        "email": "bob@example.com",
        "message": "Hello there, need help",
    }
    payload.update(overrides)
    return payload


def html_part(message) -> str:
    for part in message.walk():
        if part.get_content_type() == "text/html":
            return part.get_payload(decode=True).decode("utf-8")
    raise AssertionError("message has no HTML part")


def text_part(message) -> str:
    for part in message.walk():
        if part.get_content_type() == "text/plain":
            return part.get_payload(decode=True).decode("utf-8")
    raise AssertionError("message has no plain-text part")
