"""
duscrape – scrapers for the University of Denver bulletin, athletics site and events calendar.
"""
