"""Cross-cutting helpers: errors, clock, money and calendar arithmetic."""
