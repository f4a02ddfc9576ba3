"""CLI (Click) 와 콘솔 UI (Rich)."""
