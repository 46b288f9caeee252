"""The Egg language core: parsing, scoping and evaluation."""
