"""
Scripts Package
Deploy tasks and one-shot interaction scripts
"""
