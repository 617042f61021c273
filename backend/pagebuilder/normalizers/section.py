def normalize_section(section):
    return {
        "id": section.section_id,
        "type": section.type,
        "order": section.order,
        "config": section.config or {},
        "style": section.style or {}
    }
