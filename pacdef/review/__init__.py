"""Carrying out the decisions taken on packages that no group declares."""