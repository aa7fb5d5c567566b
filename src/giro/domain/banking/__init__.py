"""Banking domain package.

This package contains what the transfer workflow needs to know about
banks: the bank info resolved from a BIC and the lookup port.
"""
