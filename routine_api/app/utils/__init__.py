"""Small helpers shared by services: validators and user‑agent parsing."""
