"""Classical cipher toolkit: keyed transforms and unsupervised cryptanalysis."""

__version__ = "0.1.0"
