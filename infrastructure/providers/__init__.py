from .base import ExchangeRateProvider
from .currencyapi import CurrencyAPIProvider, extract_rates

__all__ = ['ExchangeRateProvider', 'CurrencyAPIProvider', 'extract_rates']
