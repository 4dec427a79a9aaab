from data_designer.plugins.plugin import Plugin, PluginType

article_quality_plugin = Plugin(
    config_qualified_name="data_designer_article_quality.config.ArticleQualityColumnConfig",
    impl_qualified_name="data_designer_article_quality.generator.ArticleQualityColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
