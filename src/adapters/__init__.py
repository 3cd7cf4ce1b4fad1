"""Adaptadores de infraestructura (HTTP contra el backend de la federación)."""
