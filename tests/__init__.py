__description__ = "Test suite for synteny-remap"

TEST_CATEGORIES = {
    'offsets': 'Offset table and coordinate remapping tests',
    'scanner': 'Match stream parsing tests',
    'remapper': 'Match classification tests',
    'assembler': 'Cluster and synteny group assembly tests',
    'flush_controller': 'Query transition and flush tests',
    'config': 'Configuration loading tests',
    'integration': 'FASTA to report end-to-end tests',
}
