"""Thin pygame / pyunicodegame adapters. No game logic here."""
