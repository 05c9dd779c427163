"""Supply chain reporting version."""

VERSION = "1.0.0"
