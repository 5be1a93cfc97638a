from eventdraft.providers.marketplace.eventbrite_provider import EventbriteProvider
from eventdraft.providers.marketplace.seatgeek_provider import SeatGeekProvider
from eventdraft.providers.marketplace.ticketmaster_provider import TicketmasterProvider

__all__ = ["EventbriteProvider", "SeatGeekProvider", "TicketmasterProvider"]
