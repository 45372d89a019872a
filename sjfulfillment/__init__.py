"""SJFulfillment notification and webhook service.

The package re-exports nothing; import the submodules directly.
"""
