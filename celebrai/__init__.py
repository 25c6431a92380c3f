"""Celebrai - contracts, notifications and dashboard API for party-decoration businesses"""
