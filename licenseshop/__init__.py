"""Service de checkout des licences: commande web -> abonnement Stripe."""
