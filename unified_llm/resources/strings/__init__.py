"""Message catalog bundles, one ``<language>.json`` file per language."""
