"""FreenetTray – Lebenszyklus der lokalen Freenet-Node (Suche, Migration, Login-Item)."""

__version__ = "2.0.0"
