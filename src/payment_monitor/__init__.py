"""Stripe payment-failure monitor with Gmail alerts and Airtable tracking."""

__version__ = "0.1.0"
