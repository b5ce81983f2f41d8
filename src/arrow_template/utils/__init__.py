"""Support utilities for arrow_template."""
