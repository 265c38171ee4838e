from .page_config import setup_page
