"""GadgetsInc customer-service chat backend and tool servers."""
