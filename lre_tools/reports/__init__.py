"""Text reports and plots for LRE Tools analyses."""
