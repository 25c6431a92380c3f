"""Contract domain - PDF generation and signing"""
