"""Service de paiement des réservations d'hôtel (Stripe: liens de paiement et Payment Element)."""
