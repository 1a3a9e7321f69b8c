"""Low-level entity, layout, archetype and component storage."""