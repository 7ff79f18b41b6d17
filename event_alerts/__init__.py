"""Event-to-user notification service for the Albay tourism catalog."""
