"""
Service initialization and dependency injection for Booth Leads API.

Creates and manages all service instances used by the API.
"""

import logging
from typing import Optional

from config.settings import get_settings, Settings
from crm.sync import CRMClient, CRMConfig, CRMPlatform
from lead_scoring.scoring_model import LeadScorer
from llm.insights import InsightGenerator
from llm.providers.openai_provider import OpenAIProvider
from storage.lead_store import LeadStore, InMemoryLeadStore, JsonFileLeadStore

logger = logging.getLogger(__name__)


class Services:
    """Container for all application services."""

    def __init__(self):
        self.settings: Optional[Settings] = None
        self.store: Optional[LeadStore] = None
        self.lead_scorer: Optional[LeadScorer] = None
        self.crm_client: Optional[CRMClient] = None
        self.crm_config: Optional[CRMConfig] = None
        self.insight_generator: Optional[InsightGenerator] = None
        self._initialized = False

    def initialize(self):
        """Initialize all services."""
        if self._initialized:
            return

        self.settings = get_settings()
        logger.info(f"Initializing services with storage: {self.settings.storage_backend}")

        self._init_store()
        self._init_lead_scoring()
        self._init_crm()
        self._init_insights()
        self._initialized = True
        logger.info("All services initialized successfully")

    def _init_store(self):
        """Initialize the lead store."""
        s = self.settings
        if s.is_json_storage:
            self.store = JsonFileLeadStore(s.storage_path)
            logger.info(f"JSON lead store ready: {s.storage_path}")
        else:
            self.store = InMemoryLeadStore()
            logger.info("In-memory lead store ready")

    def _init_lead_scoring(self):
        """Initialize lead scoring components."""
        self.lead_scorer = LeadScorer()

    def _init_crm(self):
        """Initialize the simulated CRM client."""
        s = self.settings
        self.crm_client = CRMClient(
            simulated_delay=s.crm_simulated_delay,
            failure_rate=s.crm_failure_rate,
        )
        self.crm_config = CRMConfig(
            platform=CRMPlatform(s.crm_platform),
            api_key=s.crm_api_key,
            auto_sync=s.crm_auto_sync,
            sync_interval=s.crm_sync_interval,
        )
        logger.info(f"CRM client ready: {self.crm_config.platform.value}")

    def _init_insights(self):
        """Initialize the insight generator."""
        s = self.settings

        provider = None
        if s.openai_api_key:
            provider = OpenAIProvider(
                api_key=s.openai_api_key,
                model_id=s.openai_llm_model,
                max_tokens=s.max_tokens,
                temperature=s.temperature,
                timeout=s.llm_timeout,
            )
        else:
            logger.warning("OPENAI_API_KEY not set, AI insights use local templates")

        self.insight_generator = InsightGenerator(
            provider=provider,
            company_name=s.company_name,
        )

    def reset(self):
        """Drop all service instances so the next initialize() starts fresh."""
        self.__init__()

    @property
    def is_ready(self) -> bool:
        return self._initialized and self.store is not None

    def health(self) -> dict:
        """Return health status of all services."""
        return {
            "initialized": self._initialized,
            "store": type(self.store).__name__ if self.store else None,
            "lead_scoring": self.lead_scorer is not None,
            "crm_connected": bool(self.crm_config and self.crm_config.connected),
            "llm": bool(self.insight_generator and self.insight_generator.provider),
        }


# Singleton
_services = Services()


def get_services() -> Services:
    """Get the global services instance, initializing on first use."""
    if not _services._initialized:
        _services.initialize()
    return _services


def initialize_services():
    """Initialize all services (called at startup)."""
    _services.initialize()
