"""PuppetCore command-line interface."""
