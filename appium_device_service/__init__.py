"""
Appium device command service.
"""
