from __future__ import annotations
from typing import List, Tuple
from core.models import Instrument

# symbol, company, opening price, description
SEED: List[Tuple[str, str, float, str]] = [
  ("AAPL", "Apple Inc.", 178.50, "Apple Inc. designs, manufactures, and markets smartphones, personal computers, tablets, wearables, and accessories worldwide."),
  ("GOOG", "Alphabet Inc.", 140.25, "Alphabet Inc. offers various products and platforms in the United States, Europe, the Middle East, Africa, the Asia-Pacific, Canada, and Latin America."),
  ("MSFT", "Microsoft Corporation", 378.90, "Microsoft Corporation develops, licenses, and supports software, services, devices, and solutions worldwide."),
  ("AMZN", "Amazon.com Inc.", 145.80, "Amazon.com, Inc. engages in the retail sale of consumer products and subscriptions in North America and internationally."),
  ("TSLA", "Tesla Inc.", 242.15, "Tesla, Inc. designs, develops, manufactures, leases, and sells electric vehicles, and energy generation and storage systems."),
  ("NVDA", "NVIDIA Corporation", 495.20, "NVIDIA Corporation provides graphics, and compute and networking solutions in the United States, Taiwan, China, and internationally."),
  ("META", "Meta Platforms Inc.", 325.40, "Meta Platforms, Inc. engages in the development of products that enable people to connect and share with friends and family through mobile devices."),
  ("BRK.B", "Berkshire Hathaway Inc.", 362.75, "Berkshire Hathaway Inc., through its subsidiaries, engages in the insurance, freight rail transportation, and utility businesses worldwide."),
  ("JPM", "JPMorgan Chase & Co.", 155.30, "JPMorgan Chase & Co. operates as a financial services company worldwide."),
  ("V", "Visa Inc.", 265.85, "Visa Inc. operates as a payments technology company worldwide."),
  ("JNJ", "Johnson & Johnson", 156.90, "Johnson & Johnson researches, develops, manufactures, and sells various products in the healthcare field worldwide."),
  ("WMT", "Walmart Inc.", 168.20, "Walmart Inc. engages in the operation of retail, wholesale, and other units worldwide."),
  ("PG", "Procter & Gamble Co.", 162.45, "The Procter & Gamble Company provides branded consumer packaged goods to consumers in North America, Europe, the Asia Pacific, Greater China, Latin America, India, the Middle East, and Africa."),
  ("MA", "Mastercard Inc.", 425.60, "Mastercard Incorporated, a technology company, provides transaction processing and other payment-related products and services in the United States and internationally."),
  ("NFLX", "Netflix Inc.", 485.75, "Netflix, Inc. provides entertainment services. It offers TV series, films, and games across various genres and languages."),
  ("DIS", "Walt Disney Co.", 95.30, "The Walt Disney Company operates as an entertainment company worldwide."),
  ("PYPL", "PayPal Holdings Inc.", 62.45, "PayPal Holdings, Inc. operates a technology platform that enables digital payments on behalf of merchants and consumers worldwide."),
  ("INTC", "Intel Corporation", 43.80, "Intel Corporation engages in the design, manufacture, and sale of computer products and technologies worldwide."),
  ("CSCO", "Cisco Systems Inc.", 51.25, "Cisco Systems, Inc. designs, manufactures, and sells Internet Protocol based networking and other products related to the communications and information technology industry."),
  ("AMD", "Advanced Micro Devices Inc.", 115.90, "Advanced Micro Devices, Inc. operates as a semiconductor company worldwide."),
  ("CRM", "Salesforce Inc.", 220.35, "Salesforce, Inc. provides Customer Relationship Management (CRM) technology that brings companies and customers together worldwide."),
  ("ORCL", "Oracle Corporation", 118.75, "Oracle Corporation offers products and services that address enterprise information technology environments worldwide."),
  ("ADBE", "Adobe Inc.", 545.80, "Adobe Inc. operates as a diversified software company worldwide."),
  ("NKE", "Nike Inc.", 108.65, "NIKE, Inc., together with its subsidiaries, designs, develops, markets, and sells athletic footwear, apparel, equipment, accessories, and services worldwide."),
  ("COST", "Costco Wholesale Corporation", 635.90, "Costco Wholesale Corporation, together with its subsidiaries, engages in the operation of membership warehouses in the United States, Puerto Rico, Canada, the United Kingdom, Mexico, Japan, Korea, Australia, Spain, France, Iceland, China, and Taiwan."),
]

def seed_instruments() -> List[Instrument]:
  """Fresh Instrument objects for the fixed universe, in seed order."""
  return [Instrument.create(symbol, price, company, desc) for symbol, company, price, desc in SEED]
