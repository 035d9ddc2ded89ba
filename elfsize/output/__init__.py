"""Human-oriented renderings of size reports."""
