"""WSGI entrypoint for deploying the invoicecalc backend behind Passenger or gunicorn."""

from invoicecalc.backend.app import create_app

# Passenger and most WSGI servers look for a module-level ``application``.
application = create_app()
