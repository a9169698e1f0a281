"""Notification hub package initializer.

Fans out a single notification event to the email, SMS, in-app and push
channels of one user and tracks the delivery status of every channel.
"""
