"""Detection stages. Importing a stage module registers it."""
