"""Attack surface mapping: request records, an ASN cache, systems and graph exporters."""

__version__ = "0.1.0"