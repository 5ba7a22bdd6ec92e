"""HRMS Portal package.

Presentation server in front of the HRMS REST API. Organized by feature
modules (attendance, holidays, leaves, users) with a thin Flask controller
layer over services that talk to the backend through the gateway package.
"""
