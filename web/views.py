"""HTML rendering for the events listing."""
import html
import json
from datetime import datetime
from typing import Optional
from urllib.parse import quote, urlencode
from zoneinfo import ZoneInfo

from client.controller import ClientState
from processor.models import CATEGORIES, Event
from web.capture import EmailCaptureModal

# category -> (background, text) badge colors
CATEGORY_COLORS = {
    'Music': ('#fce7f3', '#be185d'),
    'Festival': ('#f3e8ff', '#7e22ce'),
    'Food & Wine': ('#ffedd5', '#c2410c'),
    'Comedy': ('#fef9c3', '#a16207'),
    'Markets': ('#dcfce7', '#15803d'),
    'Adventure': ('#fee2e2', '#b91c1c'),
    'Art': ('#dbeafe', '#1d4ed8'),
    'Opera': ('#e0e7ff', '#4338ca'),
    'Entertainment': ('#ccfbf1', '#0f766e'),
    'Sports': ('#d1fae5', '#047857'),
}
DEFAULT_CATEGORY_COLOR = ('#f3f4f6', '#374151')

DESCRIPTION_PREVIEW_LENGTH = 160


def format_date(value: datetime, tz: ZoneInfo) -> str:
    """e.g. "Mon, 15 Jan 2024" in the display time zone."""
    local = value.astimezone(tz)
    return f"{local:%a}, {local.day} {local:%b} {local.year}"


def format_date_range(start: datetime, end: Optional[datetime], tz: ZoneInfo) -> str:
    if not end or start.astimezone(tz).date() == end.astimezone(tz).date():
        return format_date(start, tz)
    return f"{format_date(start, tz)} - {format_date(end, tz)}"


def category_color(category: Optional[str]) -> tuple:
    if not category:
        return DEFAULT_CATEGORY_COLOR
    return CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR)


def truncate(text: str, limit: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    text = text or ''
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + '...'


def _e(value) -> str:
    return html.escape(str(value or ''), quote=True)


def _render_page(body: str, title: str = "Sydney Events", head_extra: str = '') -> str:
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{_e(title)}</title>{head_extra}
    <style>
      * {{ box-sizing: border-box; }}
      body {{
        margin: 0;
        font-family: system-ui, -apple-system, "Segoe UI", sans-serif;
        color: #111827;
        background: linear-gradient(135deg, #eff6ff 0%, #ffffff 50%, #fff7ed 100%);
        min-height: 100vh;
      }}
      .container {{ max-width: 1200px; margin: 0 auto; padding: 24px 20px; }}
      header {{ background: white; border-bottom: 1px solid #f3f4f6; position: sticky; top: 0; z-index: 40; }}
      .topbar {{ display: flex; flex-wrap: wrap; gap: 16px; align-items: center; justify-content: space-between; }}
      h1 {{ margin: 0; font-size: 30px; }}
      .location {{ color: #4b5563; font-size: 14px; margin-top: 4px; }}
      .btn {{
        border: 0; border-radius: 8px; padding: 10px 16px; font-weight: 600;
        background: #2563eb; color: white; cursor: pointer; text-decoration: none; display: inline-block;
      }}
      .btn:disabled {{ background: #9ca3af; cursor: not-allowed; }}
      .btn.block {{ width: 100%; text-align: center; }}
      .search input {{ width: 100%; padding: 12px 16px; border: 1px solid #e5e7eb; border-radius: 12px; font-size: 16px; }}
      .chips {{ display: flex; flex-wrap: wrap; gap: 8px; margin: 16px 0 24px; }}
      .chip {{ padding: 8px 16px; border-radius: 8px; border: 1px solid #e5e7eb; background: white; color: #374151; text-decoration: none; font-weight: 500; }}
      .chip.active {{ background: #2563eb; color: white; border-color: #2563eb; }}
      .count {{ color: #4b5563; margin-bottom: 24px; }}
      .grid {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(320px, 1fr)); gap: 24px; }}
      .card {{ background: white; border-radius: 12px; overflow: hidden; border: 1px solid #f3f4f6; box-shadow: 0 4px 10px rgba(0,0,0,0.06); }}
      .card-image {{ position: relative; height: 224px; }}
      .card-image img {{ width: 100%; height: 100%; object-fit: cover; }}
      .badge {{ position: absolute; top: 16px; left: 16px; padding: 4px 12px; border-radius: 999px; font-size: 14px; font-weight: 500; }}
      .card-body {{ padding: 24px; }}
      .card-body h3 {{ margin: 0 0 12px; font-size: 20px; }}
      .card-body p {{ color: #4b5563; font-size: 14px; }}
      .meta {{ font-size: 14px; color: #374151; margin: 6px 0; }}
      .empty {{ text-align: center; padding: 64px 0; color: #4b5563; }}
      .overlay {{ position: fixed; inset: 0; z-index: 50; display: flex; align-items: center; justify-content: center; background: rgba(0,0,0,0.5); padding: 16px; }}
      .modal {{ position: relative; width: 100%; max-width: 448px; background: white; border-radius: 16px; padding: 32px; }}
      .modal .close {{ position: absolute; top: 16px; right: 16px; background: none; border: 0; font-size: 20px; color: #9ca3af; cursor: pointer; }}
      .modal input {{ width: 100%; padding: 12px 16px; border: 1px solid #d1d5db; border-radius: 8px; margin-bottom: 8px; }}
      .field-error {{ color: #dc2626; font-size: 14px; margin: 0 0 12px; }}
      .fineprint {{ font-size: 12px; color: #6b7280; text-align: center; }}
      footer {{ background: white; border-top: 1px solid #f3f4f6; margin-top: 64px; text-align: center; color: #4b5563; }}
    </style>
  </head>
  <body>
{body}
  </body>
</html>
"""


RELOAD_HEAD = '\n    <meta http-equiv="refresh" content="2">'


def render_loading() -> str:
    """Served to visitors who arrive while the first load is still running."""
    body = """
    <div class="empty">
      <p>Loading events...</p>
    </div>"""
    return _render_page(body, head_extra=RELOAD_HEAD)


def render_event_card(event: Event, tz: ZoneInfo) -> str:
    badge = ''
    if event.category:
        background, color = category_color(event.category)
        badge = (
            f'<span class="badge" style="background:{background};color:{color}">'
            f'{_e(event.category)}</span>'
        )

    price = f'<div class="meta price"><strong>{_e(event.price)}</strong></div>' if event.price else ''

    return f"""
      <article class="card">
        <div class="card-image">
          <img src="{_e(event.display_image_url)}" alt="{_e(event.title)}">
          {badge}
        </div>
        <div class="card-body">
          <h3>{_e(event.title)}</h3>
          <p>{_e(truncate(event.description))}</p>
          <div class="meta date">{_e(format_date_range(event.event_date, event.event_end_date, tz))}</div>
          <div class="meta venue">{_e(event.venue)}</div>
          {price}
          <a class="btn block" href="/events/{quote(event.id, safe='')}/tickets">GET TICKETS</a>
        </div>
      </article>"""


def render_modal(modal: EmailCaptureModal) -> str:
    error = f'<p class="field-error">{_e(modal.error)}</p>' if modal.error else ''
    disabled = ' disabled' if modal.is_submitting else ''
    label = 'Processing...' if modal.is_submitting else 'Continue to Tickets'

    return f"""
    <div class="overlay">
      <div class="modal" role="dialog" aria-modal="true">
        <form method="post" action="/modal/close">
          <button class="close" type="submit" aria-label="Close">&times;</button>
        </form>
        <h2>Get Your Tickets</h2>
        <p>Enter your email to continue to <strong>{_e(modal.event_title)}</strong></p>
        <form method="post" action="/events/{quote(modal.event_id, safe='')}/tickets"
              onsubmit="this.querySelector('button[type=submit]').disabled = true">
          <input type="email" name="email" value="{_e(modal.email)}" placeholder="your.email@example.com"{disabled}>
          {error}
          <button class="btn block" type="submit"{disabled}>{label}</button>
          <p class="fineprint">We'll only use your email to send you updates about Sydney events. You can unsubscribe anytime.</p>
        </form>
      </div>
    </div>"""


def _category_chip(category: str, selected: str) -> str:
    css = 'chip active' if category == selected else 'chip'
    return f'<a class="{css}" href="/?{urlencode({"category": category})}">{_e(category)}</a>'


def render_index(
    state: ClientState,
    tz: ZoneInfo,
    modal: Optional[EmailCaptureModal] = None,
    open_url: Optional[str] = None
) -> str:
    """
    Render the listing page from the controller state.

    Args:
        state: Current client state
        tz: Display time zone for dates
        modal: Capture form to show over the listing, if any
        open_url: Ticket URL to open in a new tab once the page loads
    """
    if state.loading:
        return render_loading()

    refresh_disabled = ' disabled' if state.refreshing else ''
    refresh_label = 'Refreshing...' if state.refreshing else 'Refresh Events'

    filtered = state.filtered_events
    if filtered:
        plural = '' if len(filtered) == 1 else 's'
        cards = ''.join(render_event_card(event, tz) for event in filtered)
        listing = f"""
      <div class="count">Showing <strong>{len(filtered)}</strong> event{plural}</div>
      <div class="grid">{cards}
      </div>"""
    else:
        hint = (
            'Try adjusting your filters or search query'
            if state.has_filters else 'Check back soon for upcoming events'
        )
        listing = f"""
      <div class="empty">
        <h3>No events found</h3>
        <p>{hint}</p>
      </div>"""

    chips = ''.join(_category_chip(category, state.selected_category) for category in CATEGORIES)

    script = ''
    if open_url:
        target = json.dumps(open_url).replace('</', '<\\/')
        script = f"<script>window.open({target}, '_blank');</script>"

    body = f"""
    <header>
      <div class="container topbar">
        <div>
          <h1>Sydney Events</h1>
          <div class="location">Sydney, Australia</div>
        </div>
        <form method="post" action="/refresh"
              onsubmit="var b = this.querySelector('button[type=submit]'); b.disabled = true; b.textContent = 'Refreshing...'">
          <button class="btn" type="submit"{refresh_disabled}>{refresh_label}</button>
        </form>
      </div>
    </header>
    <main class="container">
      <form class="search" method="get" action="/">
        <input type="text" name="q" value="{_e(state.search_query)}"
               placeholder="Search events by name, venue, or description...">
        <input type="hidden" name="category" value="{_e(state.selected_category)}">
      </form>
      <nav class="chips">{chips}</nav>
      {listing}
    </main>
    <footer>
      <div class="container">
        <p>Discover the best events in Sydney, Australia</p>
        <p>Events are automatically updated from various sources</p>
      </div>
    </footer>
    {render_modal(modal) if modal else ''}
    {script}"""
    return _render_page(body, head_extra=RELOAD_HEAD if state.refreshing else '')
