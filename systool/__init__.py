"""DNS and TLS analysis library: queries, propagation, consistency, bulk runs, DNSSEC and certificates."""

__version__ = "1.0.1"