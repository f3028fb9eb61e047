"""Core document model: XPath helpers, node types and feature resolution."""
