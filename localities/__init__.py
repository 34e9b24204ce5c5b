"""Algeria wilayas/communes: XML import, cached store and bilingual labels."""

__version__ = "1.0.0"
