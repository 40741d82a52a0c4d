"""HTTP surface of the innhopp console."""
