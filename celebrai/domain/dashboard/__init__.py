"""Dashboard domain - admin statistics"""
