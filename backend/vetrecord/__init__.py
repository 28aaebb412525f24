"""VetRecord - veterinary patient records service."""
