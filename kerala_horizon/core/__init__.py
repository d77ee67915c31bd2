"""Cross-cutting helpers: errors, validation and caching."""
