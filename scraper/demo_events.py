"""Demo event source for Sydney listings."""
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from processor.models import EventCandidate, to_timestamp

logger = logging.getLogger(__name__)

_PEXELS = 'https://images.pexels.com/photos/{0}/pexels-photo-{0}.jpeg?auto=compress&cs=tinysrgb&w=1200'


class DemoEventsScraper:
    """
    Produces a fixed set of Sydney events.

    No site is fetched; dates are laid out relative to the time of the call
    so the listing always looks current.
    """

    SOURCE = 'demo'

    def fetch_events(self, now: Optional[datetime] = None) -> List[EventCandidate]:
        """
        Build the demo candidates.

        Args:
            now: Reference time (default: current UTC time)

        Returns:
            List of EventCandidate objects
        """
        now = now or datetime.now(timezone.utc)

        def days(n: int) -> str:
            return to_timestamp(now + timedelta(days=n))

        events = [
            EventCandidate(
                title='Vivid Sydney 2026',
                description=(
                    "Experience the magic of light, music and ideas at the world's largest "
                    "festival of light, music and ideas. Vivid Sydney transforms the city with "
                    "mesmerizing light installations, creative performances, and "
                    "thought-provoking talks."
                ),
                event_date=to_timestamp(datetime(now.year, 5, 24, tzinfo=timezone.utc)),
                event_end_date=to_timestamp(datetime(now.year, 6, 15, tzinfo=timezone.utc)),
                venue='Various Locations',
                address='Circular Quay, Darling Harbour, and more',
                image_url=_PEXELS.format(1105666),
                original_url='https://www.vividsydney.com',
                ticket_url='https://www.vividsydney.com/tickets',
                price='Free (some events ticketed)',
                category='Festival',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Sydney Opera House: La Bohème',
                description=(
                    "Puccini's beloved opera tells the passionate story of love and loss in "
                    "19th century Paris. Experience this timeless masterpiece performed by "
                    "Opera Australia with world-class singers and orchestra."
                ),
                event_date=days(10),
                venue='Sydney Opera House',
                address='Bennelong Point, Sydney NSW 2000',
                image_url=_PEXELS.format(1105666),
                original_url='https://www.sydneyoperahouse.com/events/la-boheme',
                ticket_url='https://www.sydneyoperahouse.com/events/la-boheme',
                price='From $79',
                category='Opera',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Sydney Food & Wine Fair',
                description=(
                    "Indulge in the finest food and wine from Australia's best producers. "
                    "Sample premium wines, gourmet foods, and attend masterclasses with "
                    "celebrity chefs. A must-visit for food lovers."
                ),
                event_date=days(15),
                event_end_date=days(17),
                venue='International Convention Centre Sydney',
                address='14 Darling Dr, Sydney NSW 2000',
                image_url=_PEXELS.format(1267320),
                original_url='https://sydneyfoodandwinefair.com.au',
                ticket_url='https://sydneyfoodandwinefair.com.au/tickets',
                price='From $45',
                category='Food & Wine',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Coastal Comedy Club',
                description=(
                    "Laugh out loud with Australia's top comedians in an intimate club "
                    "setting. This week features rising stars and surprise guest "
                    "appearances. Great food and drinks available."
                ),
                event_date=days(3),
                venue='The Comedy Store',
                address='Entertainment Quarter, 122 Lang Rd, Moore Park NSW 2021',
                image_url=_PEXELS.format(1047442),
                original_url='https://www.comedystore.com.au',
                ticket_url='https://www.comedystore.com.au/tickets',
                price='$35',
                category='Comedy',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Bondi Beach Markets',
                description=(
                    "Browse unique handmade crafts, vintage clothing, artisan jewelry, and "
                    "local art at Bondi's famous weekend markets. Enjoy live music, "
                    "delicious street food, and stunning ocean views."
                ),
                event_date=days(5),
                venue='Bondi Beach Public School',
                address='Campbell Parade, Bondi Beach NSW 2026',
                image_url=_PEXELS.format(1309240),
                original_url='https://bondimarkets.com.au',
                ticket_url='https://bondimarkets.com.au',
                price='Free entry',
                category='Markets',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Sydney Harbour Bridge Climb',
                description=(
                    "Scale the iconic Sydney Harbour Bridge for breathtaking 360-degree "
                    "views of the city. Professional guides share fascinating stories about "
                    "the bridge's history and construction."
                ),
                event_date=days(1),
                venue='Sydney Harbour Bridge',
                address='3 Cumberland St, The Rocks NSW 2000',
                image_url=_PEXELS.format(783682),
                original_url='https://www.bridgeclimb.com',
                ticket_url='https://www.bridgeclimb.com/tickets',
                price='From $268',
                category='Adventure',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Sydney Jazz Festival',
                description=(
                    "Three nights of world-class jazz featuring international and local "
                    "artists. From smooth classics to contemporary fusion, experience the "
                    "best of jazz in Sydney's premier venues."
                ),
                event_date=days(20),
                event_end_date=days(22),
                venue='City Recital Hall',
                address='2 Angel Pl, Sydney NSW 2000',
                image_url=_PEXELS.format(1105666),
                original_url='https://sydneyjazzfestival.com.au',
                ticket_url='https://sydneyjazzfestival.com.au/tickets',
                price='From $65',
                category='Music',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Art Gallery NSW: Modern Masters',
                description=(
                    "Explore an extraordinary collection of modern art featuring works by "
                    "Picasso, Matisse, and Australian masters. This limited exhibition "
                    "showcases rarely-seen pieces from private collections."
                ),
                event_date=days(7),
                event_end_date=days(90),
                venue='Art Gallery of New South Wales',
                address='Art Gallery Rd, Sydney NSW 2000',
                image_url=_PEXELS.format(1839919),
                original_url='https://www.artgallery.nsw.gov.au',
                ticket_url='https://www.artgallery.nsw.gov.au/tickets',
                price='$28',
                category='Art',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Luna Park Sydney Twilight Sessions',
                description=(
                    "Experience the magic of Luna Park after dark with unlimited rides, "
                    "carnival games, and spectacular harbour views. Perfect for families "
                    "and thrill-seekers alike."
                ),
                event_date=days(4),
                venue='Luna Park Sydney',
                address='1 Olympic Dr, Milsons Point NSW 2061',
                image_url=_PEXELS.format(1701214),
                original_url='https://www.lunaparksydney.com',
                ticket_url='https://www.lunaparksydney.com/tickets',
                price='From $59',
                category='Entertainment',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Taronga Zoo Twilight Concert Series',
                description=(
                    "Enjoy live music with stunning harbour views at Taronga Zoo. Pack a "
                    "picnic, explore the zoo after hours, and watch the sunset over Sydney "
                    "while listening to top Australian artists."
                ),
                event_date=days(12),
                venue='Taronga Zoo',
                address='Bradleys Head Rd, Mosman NSW 2088',
                image_url=_PEXELS.format(1661179),
                original_url='https://taronga.org.au/twilight',
                ticket_url='https://taronga.org.au/twilight/tickets',
                price='From $75',
                category='Music',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Sydney Marathon',
                description=(
                    "Run through Sydney's most iconic locations including the Harbour "
                    "Bridge and Opera House. Join thousands of runners in this world-class "
                    "marathon event with distances for all abilities."
                ),
                event_date=days(45),
                venue='Sydney CBD',
                address='Starting at Milsons Point, Sydney NSW',
                image_url=_PEXELS.format(2526878),
                original_url='https://www.sydneymarathon.com',
                ticket_url='https://www.sydneymarathon.com/register',
                price='From $150',
                category='Sports',
                source=self.SOURCE,
            ),
            EventCandidate(
                title='Sculpture by the Sea',
                description=(
                    "Walk the stunning coastal path from Bondi to Tamarama and experience "
                    "over 100 sculptures by artists from around the world. This free "
                    "exhibition transforms the coastline into an outdoor gallery."
                ),
                event_date=days(30),
                event_end_date=days(44),
                venue='Bondi to Tamarama Coastal Walk',
                address='Bondi Beach, NSW 2026',
                image_url=_PEXELS.format(1109354),
                original_url='https://sculpturebythesea.com',
                ticket_url='https://sculpturebythesea.com',
                price='Free',
                category='Art',
                source=self.SOURCE,
            ),
        ]

        logger.info(f"Generated {len(events)} demo events")
        return events
