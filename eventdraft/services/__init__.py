"""Domain services: slug tokenizing, classification, HTML extraction,
normalization and the extraction request boundary."""
