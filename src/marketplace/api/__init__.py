"""Marketplace HTTP API.

The package stays free of imports: ``marketplace.init()`` loads every module
in this folder on its own, in directory order, so the application factory
lives in ``marketplace.api.app``.
"""
