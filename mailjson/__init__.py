"""
mailjson

Extracts JSON payloads carried by inbound emails, either as an attachment
or behind a link in the message body.
"""

__version__ = "0.1.0"
