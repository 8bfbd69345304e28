"""Codec core: models, classifiers and the flat file collection."""
