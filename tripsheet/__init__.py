"""
tripsheet – itinerary spreadsheet export -> normalized day/period/timeline JSON.
"""
