"""Command line interface for s3apt"""
