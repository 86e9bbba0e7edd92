"""
Solr response models.

Pydantic models of the JSON bodies returned by the core admin, ping,
update and select handlers. Solr names fields in camelCase; models expose
snake_case attributes through aliases and ignore fields they do not
declare.

Dependencies: pydantic
System role: Search engine response contracts
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

D = TypeVar("D")


class SolrModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SolrResponseHeader(SolrModel):
    zk_connected: Any = Field(default=None, alias="zkConnected")
    status: int
    qtime: int = Field(default=0, alias="QTime")
    params: dict[str, Any] | None = None


class SolrErrorInfo(SolrModel):
    metadata: list[str] = Field(default_factory=list)
    msg: str = ""
    code: int = 0


class SolrPingResponse(SolrModel):
    header: SolrResponseHeader = Field(alias="responseHeader")
    status: str


class SolrIndexInfo(SolrModel):
    num_docs: int = Field(alias="numDocs")
    max_doc: int = Field(default=0, alias="maxDoc")
    deleted_docs: int = Field(default=0, alias="deletedDocs")
    version: int = 0
    segment_count: int = Field(default=0, alias="segmentCount")
    current: bool = False
    has_deletions: bool = Field(default=False, alias="hasDeletions")
    directory: str = ""
    segments_file: str = Field(default="", alias="segmentsFile")
    segments_file_size_in_bytes: int = Field(default=0, alias="segmentsFileSizeInBytes")
    user_data: Any = Field(default=None, alias="userData")
    size_in_bytes: int = Field(default=0, alias="sizeInBytes")
    size: str = ""


class SolrCoreStatus(SolrModel):
    name: str
    instance_dir: str = Field(default="", alias="instanceDir")
    data_dir: str = Field(default="", alias="dataDir")
    config: str = ""
    schema_: str = Field(default="", alias="schema")
    start_time: str = Field(default="", alias="startTime")
    uptime: int = 0
    index: SolrIndexInfo


class SolrCoreList(SolrModel):
    header: SolrResponseHeader = Field(alias="responseHeader")
    init_failures: Any = Field(default=None, alias="initFailures")
    # Cores that do not exist appear as empty objects
    status: dict[str, dict[str, Any]] | None = None
    error: SolrErrorInfo | None = None


class SolrSimpleResponse(SolrModel):
    header: SolrResponseHeader = Field(alias="responseHeader")
    error: SolrErrorInfo | None = None


class SolrSelectBody(SolrModel, Generic[D]):
    num_found: int = Field(alias="numFound")
    start: int = 0
    num_found_exact: bool = Field(default=True, alias="numFoundExact")
    docs: list[D] = Field(default_factory=list)


class SolrSelectResponse(SolrModel, Generic[D]):
    header: SolrResponseHeader = Field(alias="responseHeader")
    response: SolrSelectBody[D]
    facets: dict[str, Any] | None = None
    error: SolrErrorInfo | None = None


class Bucket(SolrModel):
    val: Any
    count: int


class SolrTermFacetCount(SolrModel):
    buckets: list[Bucket] = Field(default_factory=list)


class SolrRangeFacetCountInfo(SolrModel):
    count: int


class SolrRangeFacetCount(SolrModel):
    buckets: list[Bucket] = Field(default_factory=list)
    before: SolrRangeFacetCountInfo | None = None
    after: SolrRangeFacetCountInfo | None = None
    between: SolrRangeFacetCountInfo | None = None
