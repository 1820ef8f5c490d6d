"""Academy Dashboard package.

Feature modules (catalog, directory, attendance, payments) each expose a thin
Flask controller layer on top of service and repository layers.
"""
