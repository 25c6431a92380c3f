"""Notification domain - contract-signed emails"""
