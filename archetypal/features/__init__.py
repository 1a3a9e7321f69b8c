"""Optional features: parent/child hierarchy and entity-count debugging."""